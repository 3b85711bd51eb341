"""
The integers ZZ and the rationals QQ.

Raw data is a Python int for ZZ and a fractions.Fraction for QQ.  Neither
ring has defining data, so both share the empty UnitContext; every
IntegerRing() compares equal to every other.

Exact rings never accept binary floats.
"""

from __future__ import annotations

import operator
from fractions import Fraction
from typing import Any

from .context import UnitContext
from .conversion import conversion
from .errors import DomainError
from .ring import Element, Ring


def _parse_int(ring: Ring, text: str) -> int:
    s = text.strip()
    try:
        return int(s, 10)
    except ValueError as e:
        raise ring._reject(text, "not a base-10 integer") from e


class Integer(Element):
    __slots__ = ()

    def __int__(self) -> int:
        return self._data

    def __index__(self) -> int:
        return self._data

    def __lt__(self, other: Any) -> bool:
        return self._ordered(other, operator.lt, "__gt__")

    def __le__(self, other: Any) -> bool:
        return self._ordered(other, operator.le, "__ge__")

    def __gt__(self, other: Any) -> bool:
        return self._ordered(other, operator.gt, "__lt__")

    def __ge__(self, other: Any) -> bool:
        return self._ordered(other, operator.ge, "__le__")

    def __abs__(self) -> "Integer":
        return self._parent._wrap(abs(self._data))


class IntegerRing(Ring):
    element_class = Integer

    def __init__(self) -> None:
        super().__init__(UnitContext())

    def name(self) -> str:
        return "Integer ring"

    def __repr__(self) -> str:
        return "IntegerRing()"

    def characteristic(self) -> int:
        return 0

    def _coerce(self, source: Any) -> int:
        if isinstance(source, int):
            return int(source)
        if isinstance(source, str):
            return _parse_int(self, source)
        if isinstance(source, Fraction):
            if source.denominator != 1:
                raise self._reject(source, "denominator is not 1")
            return source.numerator
        if isinstance(source, float):
            raise self._reject(source, "floats are not exact")
        return self._coerce_via_graph(source)

    def _zero_data(self) -> int:
        return 0

    def _one_data(self) -> int:
        return 1

    def _add(self, a: int, b: int) -> int:
        return a + b

    def _sub(self, a: int, b: int) -> int:
        return a - b

    def _neg(self, a: int) -> int:
        return -a

    def _mul(self, a: int, b: int) -> int:
        return a * b

    def _inv(self, a: int) -> int:
        if a in (1, -1):
            return a
        return super()._inv(a)

    def _is_zero(self, a: int) -> bool:
        return a == 0


class Rational(Element):
    __slots__ = ()

    def numerator(self) -> Integer:
        return ZZ._wrap(self._data.numerator)

    def denominator(self) -> Integer:
        return ZZ._wrap(self._data.denominator)

    def __lt__(self, other: Any) -> bool:
        return self._ordered(other, operator.lt, "__gt__")

    def __le__(self, other: Any) -> bool:
        return self._ordered(other, operator.le, "__ge__")

    def __gt__(self, other: Any) -> bool:
        return self._ordered(other, operator.gt, "__lt__")

    def __ge__(self, other: Any) -> bool:
        return self._ordered(other, operator.ge, "__le__")

    def __abs__(self) -> "Rational":
        return self._parent._wrap(abs(self._data))


class RationalField(Ring):
    element_class = Rational

    def __init__(self) -> None:
        super().__init__(UnitContext())

    def name(self) -> str:
        return "Rational field"

    def __repr__(self) -> str:
        return "RationalField()"

    def is_field(self) -> bool:
        return True

    def characteristic(self) -> int:
        return 0

    def _coerce(self, source: Any) -> Fraction:
        if isinstance(source, (int, Fraction)):
            return Fraction(source)
        if isinstance(source, str):
            try:
                return Fraction(source.strip())
            except (ValueError, ZeroDivisionError) as e:
                raise self._reject(source, "not a rational literal like '3/2'") from e
        if isinstance(source, float):
            raise self._reject(source, "floats are not exact")
        if isinstance(source, (tuple, list)):
            if len(source) != 2:
                raise self._reject(source, "expected a (numerator, denominator) pair")
            num = ZZ.new(source[0])._data
            den = ZZ.new(source[1])._data
            if den == 0:
                raise self._reject(source, "zero denominator")
            return Fraction(num, den)
        return self._coerce_via_graph(source)

    def _coerces_from(self, other: Ring) -> bool:
        return other == self or isinstance(other, IntegerRing)

    def _zero_data(self) -> Fraction:
        return Fraction(0)

    def _one_data(self) -> Fraction:
        return Fraction(1)

    def _add(self, a: Fraction, b: Fraction) -> Fraction:
        return a + b

    def _sub(self, a: Fraction, b: Fraction) -> Fraction:
        return a - b

    def _neg(self, a: Fraction) -> Fraction:
        return -a

    def _mul(self, a: Fraction, b: Fraction) -> Fraction:
        return a * b

    def _inv(self, a: Fraction) -> Fraction:
        if a == 0:
            raise ZeroDivisionError("division by zero in Rational field")
        return 1 / a

    def _is_zero(self, a: Fraction) -> bool:
        return a == 0


ZZ = IntegerRing()
QQ = RationalField()


# =============================================================================
# Conversions
# =============================================================================


@conversion(int, Integer)
def _int_to_integer(x: int) -> Integer:
    return ZZ._wrap(int(x))


@conversion(Integer, int)
def _integer_to_int(x: Integer) -> int:
    return x._data


@conversion(Integer, str)
def _integer_to_str(x: Integer) -> str:
    return str(x._data)


@conversion(Integer, Rational)
def _integer_to_rational(x: Integer) -> Rational:
    return QQ._wrap(Fraction(x._data))


@conversion(Rational, Integer, fallible=True)
def _rational_to_integer(x: Rational) -> Integer:
    if x._data.denominator != 1:
        raise DomainError(f"{x} is not an integer", ring=ZZ, value=x)
    return ZZ._wrap(x._data.numerator)


@conversion(Fraction, Rational)
def _fraction_to_rational(x: Fraction) -> Rational:
    return QQ._wrap(x)


@conversion(Rational, Fraction)
def _rational_to_fraction(x: Rational) -> Fraction:
    return x._data


@conversion(Rational, str)
def _rational_to_str(x: Rational) -> str:
    return str(x._data)
