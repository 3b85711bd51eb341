from __future__ import annotations

from fractions import Fraction

import pytest

from generic_rings import (
    GRAPH,
    QQ,
    ZZ,
    ConversionError,
    ConversionGraph,
    DomainError,
    FinFldElem,
    FiniteField,
    Integer,
    IntMod,
    IntModRing,
    Rational,
    convert,
)


class A:
    def __init__(self, v: int) -> None:
        self.v = v


class SubA(A):
    pass


class B:
    def __init__(self, v: int) -> None:
        self.v = v


class C:
    def __init__(self, v: int) -> None:
        self.v = v


def _graph() -> ConversionGraph:
    g = ConversionGraph()
    g.register(A, B, lambda a: B(a.v + 1))
    g.register(B, C, lambda b: C(b.v * 10))
    return g


def test_chains_compose_without_a_direct_edge() -> None:
    g = _graph()

    path = g.path(A, C)

    assert path.nodes == (A, B, C)
    assert str(path) == "A -> B -> C"
    assert g.convert(A(1), C).v == 20


def test_composed_path_is_fallible_when_any_step_is() -> None:
    g = _graph()
    g.register(C, int, lambda c: c.v, fallible=True)

    assert not g.path(A, C).fallible
    assert g.path(A, int).fallible


def test_missing_path_raises_conversion_error() -> None:
    g = _graph()

    assert not g.can_convert(C, A)
    with pytest.raises(ConversionError):
        g.convert(C(1), A)


def test_identity_edge_is_rejected() -> None:
    with pytest.raises(ValueError):
        ConversionGraph().register(A, A, lambda a: a)


def test_subclasses_use_the_most_specific_declared_source() -> None:
    g = _graph()

    assert g.convert(SubA(2), B).v == 3


def test_registration_invalidates_cached_paths() -> None:
    g = _graph()
    assert len(g.path(A, C).steps) == 2

    g.register(A, C, lambda a: C(-1))

    assert len(g.path(A, C).steps) == 1
    assert g.convert(A(1), C).v == -1


def test_declare_decorator_registers_edge() -> None:
    g = ConversionGraph()

    @g.declare(B, A)
    def _b_to_a(b: B) -> A:
        return A(b.v)

    assert [(e.source, e.target) for e in g.edges()] == [(B, A)]
    assert g.convert(B(5), A).v == 5


def test_intmod_reaches_str_through_integer() -> None:
    x = IntModRing(7).new(10)

    assert str(GRAPH.path(IntMod, str)) == "IntMod -> Integer -> str"
    assert x.to(str) == "3"
    assert convert(x, Integer) == ZZ(3)


def test_default_graph_fallibility() -> None:
    assert GRAPH.path(Rational, Integer).fallible
    assert not GRAPH.path(Integer, Rational).fallible
    assert not GRAPH.path(FinFldElem, int).fallible


def test_fallible_conversion_refuses_non_integral_rational() -> None:
    assert QQ((6, 3)).to(Integer) == ZZ(2)
    with pytest.raises(DomainError):
        QQ((1, 2)).to(Integer)


@pytest.mark.parametrize("z", [0, 1, -1, 2 ** 70, -12345])
def test_integer_rational_round_trip(z: int) -> None:
    x = ZZ(z)

    assert x.to(Rational).to(Integer) == x
    assert convert(z, Integer).to(int) == z


@pytest.mark.parametrize("q", [Fraction(0), Fraction(-7, 3), Fraction(22, 7)])
def test_fraction_rational_round_trip(q: Fraction) -> None:
    assert convert(q, Rational).to(Fraction) == q


def test_conversions_are_referentially_transparent() -> None:
    x = FiniteField(5, 2).new([3, 4])

    assert x.to(Integer) == x.to(Integer) == ZZ(3 + 4 * 5)


def test_target_of_same_type_is_returned_unchanged() -> None:
    x = ZZ(4)

    assert GRAPH.convert(x, Integer) is x
