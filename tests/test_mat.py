from __future__ import annotations

import pytest

from generic_rings import (
    ZZ,
    ConstructionError,
    ConversionError,
    DomainError,
    Mat,
    MatSpace,
    PolyRing,
    TypeMismatch,
    matrix_space,
)


def test_rows_and_flat_sources_agree(m23) -> None:
    a = m23.new([1, 2, 3, 4, 5, 6])
    b = m23.new([[1, 2, 3], [4, 5, 6]])

    assert isinstance(a, Mat)
    assert a == b
    assert a.nrows() == 2 and a.ncols() == 3
    assert a[1, 2] == 6
    assert a.get_entry(0, 1) == 2
    assert a.get_coeff((1, 0)) == 4
    assert [[int(x) for x in row] for row in a.rows()] == [[1, 2, 3], [4, 5, 6]]


def test_entries_outside_the_shape_raise_index_error(m23) -> None:
    a = m23.zero()

    with pytest.raises(IndexError):
        a[2, 0]
    with pytest.raises(IndexError):
        a.set_entry(0, 3, 1)
    with pytest.raises(IndexError):
        a.get_coeff((-1, 0))


def test_set_coeff_get_coeff_round_trip(m23) -> None:
    a = m23.zero()
    a.set_coeff((1, 2), 9)
    a[0, 0] = -4

    assert a.get_coeff((1, 2)) == 9
    assert a[0, 0] == -4
    assert a[0, 1].is_zero()


def test_bad_entries(m23) -> None:
    a = m23.zero()
    with pytest.raises(TypeMismatch):
        a[0, 0] = PolyRing(ZZ, "x").gen()
    with pytest.raises(ConversionError):
        m23.new([1, 2, "x", 4, 5, 6])
    with pytest.raises(ConversionError):
        m23.new([1, 2, 3])
    with pytest.raises(ConversionError):
        m23.new(5)


def test_names_nest_the_base_ring() -> None:
    M = MatSpace(PolyRing(ZZ, "x"), 3, 4)

    assert str(M) == "Space of 3x4 matrices over (Univariate polynomial ring in x over Integer ring)"
    assert str(MatSpace(ZZ, 2, 2)) == "Space of 2x2 matrices over Integer ring"
    assert repr(matrix_space(ZZ, 2)) == "MatSpace(IntegerRing(), 2, 2)"
    assert M.depth == 2


def test_shape_is_validated() -> None:
    with pytest.raises(ConstructionError):
        MatSpace(ZZ, -1, 2)
    with pytest.raises(ConstructionError):
        MatSpace("ZZ", 1, 1)


def test_transpose_and_product_land_in_matching_spaces(m23) -> None:
    a = m23.new([1, 2, 3, 4, 5, 6])
    t = a.transpose()

    assert t.parent() == MatSpace(ZZ, 3, 2)
    assert t[2, 1] == 6
    p = a * t
    assert p.parent() == MatSpace(ZZ, 2, 2)
    assert [[int(x) for x in row] for row in p.rows()] == [[14, 32], [32, 77]]
    with pytest.raises(TypeMismatch):
        a * a


def test_square_spaces_form_a_ring() -> None:
    M = MatSpace(ZZ, 2, 2)
    a = M.new([[1, 1], [0, 1]])

    assert M.identity() * a == a
    assert a ** 3 == M.new([[1, 3], [0, 1]])
    assert a - a == 0
    assert a + 1 == M.new([[2, 1], [0, 2]])
    assert str(a) == "[1, 1]\n[0, 1]"
    assert repr(a) == "Mat([[1, 1], [0, 1]], parent='Space of 2x2 matrices over Integer ring')"
    with pytest.raises(DomainError):
        MatSpace(ZZ, 2, 3).one()


def test_scalar_action_on_any_shape(m23) -> None:
    a = m23.new([1, 2, 3, 4, 5, 6])

    assert 2 * a == m23.new([2, 4, 6, 8, 10, 12])
    assert a * ZZ(-1) == -a
    with pytest.raises(TypeMismatch):
        a + 1


def test_copy_is_deep(m23) -> None:
    a = m23.new([1, 2, 3, 4, 5, 6])
    b = a.copy()
    b[0, 0] = 100

    assert a[0, 0] == 1
    assert a.get_entry(0, 0) is not a.get_entry(0, 0)


def test_matrices_over_polynomials() -> None:
    R = PolyRing(ZZ, "x")
    x = R.gen()
    M = MatSpace(R, 2, 2)
    m = M.new([[x, 1], [0, x]])

    assert (m * m)[0, 1] == 2 * x
    assert (x * m)[0, 0] == x ** 2
    assert m.to(str) == "[x, 1]\n[0, x]"


def test_empty_space() -> None:
    E = MatSpace(ZZ, 0, 3)

    assert E.zero().rows() == []
    assert str(E.zero()) == "[]"
