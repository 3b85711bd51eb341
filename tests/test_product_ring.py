from __future__ import annotations

import pytest

from generic_rings import (
    ZZ,
    ConstructionError,
    ConversionError,
    DomainError,
    IntModRing,
    PolyRing,
    ProductElem,
    ProductRing,
    product_ring,
)


@pytest.fixture
def zz_z5() -> ProductRing:
    return ProductRing(ZZ, IntModRing(5))


def test_name_and_identity(zz_z5) -> None:
    assert str(zz_z5) == "Direct product of (Integer ring) x (Ring of integers modulo 5)"
    assert zz_z5 == product_ring(ZZ, IntModRing(5))
    assert zz_z5 != ProductRing(IntModRing(5), ZZ)
    assert zz_z5.characteristic() == 0
    assert ProductRing(IntModRing(4), IntModRing(6)).characteristic() == 12
    with pytest.raises(ConstructionError):
        ProductRing()
    with pytest.raises(ConstructionError):
        ProductRing(ZZ, 5)


def test_componentwise_arithmetic(zz_z5) -> None:
    e = zz_z5.new([3, 7])

    assert isinstance(e, ProductElem)
    assert e.get_coeff(0) == 3
    assert e.get_coeff(1) == IntModRing(5).new(2)
    assert e * e == zz_z5.new([9, 4])
    assert e + 1 == zz_z5.new([4, 3])
    assert str(e) == "(3, 2)"
    assert len(e) == 2
    with pytest.raises(IndexError):
        e.get_coeff(2)


def test_units(zz_z5) -> None:
    assert zz_z5.new([-1, 2]).inverse() == zz_z5.new([-1, 3])
    with pytest.raises(DomainError):
        zz_z5.new([1, 0]).inverse()
    with pytest.raises(ZeroDivisionError):
        zz_z5.zero().inverse()


def test_sources_are_atomic(zz_z5) -> None:
    assert zz_z5.new(2) == zz_z5.new([2, 2])
    with pytest.raises(ConversionError):
        zz_z5.new([1])
    with pytest.raises(ConversionError):
        zz_z5.new([1, "two"])


def test_products_nest_inside_polynomials(zz_z5) -> None:
    R = PolyRing(zz_z5, "t")
    p = R.new([[1, 1], [2, 3]])

    assert R.depth == 2
    assert p.get_coeff(1) == zz_z5.new([2, 3])
    assert str(R).endswith("over (Direct product of (Integer ring) x (Ring of integers modulo 5))")
