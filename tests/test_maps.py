from __future__ import annotations

import pytest

from generic_rings import (
    QQ,
    ZZ,
    ConstructionError,
    DomainError,
    Integer,
    Map,
    PolyRing,
    Rational,
    TableMap,
    TypeMismatch,
)


@pytest.fixture
def shift() -> Map:
    return Map(ZZ, ZZ, lambda x: x + 5, lambda y: y - 5)


@pytest.fixture
def scale() -> Map:
    return Map(ZZ, QQ, lambda x: x * QQ((3, 2)), lambda y: y * QQ((2, 3)))


def test_image_and_preimage(shift, scale) -> None:
    assert shift(3) == 8
    assert isinstance(shift.map("4"), Integer)
    assert shift.inv(8) == 3
    assert isinstance(scale(7), Rational)
    assert scale(7) == QQ((21, 2))
    assert scale.preimage(6) == 4
    with pytest.raises(DomainError):
        scale.preimage(QQ(1))


def test_composition_applies_the_left_map_first(shift, scale) -> None:
    m = shift.compose(scale)

    assert m.domain() == ZZ
    assert m.codomain() == QQ
    assert m(7) == 18
    assert m.inv(6) == -1
    with pytest.raises(TypeMismatch):
        scale.compose(shift)


def test_maps_without_a_preimage(shift) -> None:
    sq = Map(ZZ, ZZ, lambda x: x * x)

    assert sq(-3) == 9
    assert not sq.has_preimage()
    with pytest.raises(DomainError):
        sq.preimage(9)
    with pytest.raises(DomainError):
        sq.inverse()
    composed = sq.compose(shift)
    assert composed(2) == 9
    assert not composed.has_preimage()


def test_inverse_swaps_the_directions(shift) -> None:
    back = shift.inverse()

    assert back(8) == 3
    assert back.inv(3) == 8


def test_identity_and_canonical_embeddings() -> None:
    assert Map.identity(QQ)(QQ((1, 2))) == QQ((1, 2))
    c = Map.coercion(ZZ, QQ)
    assert isinstance(c(3), Rational)
    assert c.inv(QQ((4, 2))) == 2
    with pytest.raises(DomainError):
        c.inv(QQ((1, 2)))
    with pytest.raises(ConstructionError):
        Map.coercion(QQ, ZZ)
    with pytest.raises(ConstructionError):
        Map(ZZ, int, lambda x: x)
    assert repr(c) == "Map(Integer ring -> Rational field)"


def test_evaluation_map_from_a_polynomial_ring() -> None:
    zx = PolyRing(ZZ, "x")
    at2 = Map(zx, ZZ, lambda p: p(2))

    assert at2(zx.gen() ** 2 + 1) == 5
    assert at2(3) == 3


def test_table_maps() -> None:
    t = TableMap(ZZ, ZZ, {1: 2, 2: 4}, {2: 1, 4: 2})

    assert len(t) == 2
    assert t(1) == 2
    assert t.inv(4) == 2
    with pytest.raises(DomainError):
        t(3)
    with pytest.raises(DomainError):
        t.inv(3)
    assert not TableMap(ZZ, ZZ, {1: 1}).has_preimage()


def test_table_maps_compose_into_tables(shift) -> None:
    t = TableMap(ZZ, ZZ, {1: 2, 2: 4}, {2: 1, 4: 2})
    u = TableMap(ZZ, QQ, {2: QQ((1, 2)), 4: QQ((1, 4))}, {QQ((1, 2)): 2})

    tu = t.compose(u)
    assert isinstance(tu, TableMap)
    assert len(tu) == 2
    assert tu(2) == QQ((1, 4))
    assert tu.inv(QQ((1, 2))) == 1
    with pytest.raises(DomainError):
        tu.inv(QQ((1, 4)))

    ts = t.compose(shift)
    assert not isinstance(ts, TableMap)
    assert ts(1) == 7
    assert ts.inv(7) == 1
