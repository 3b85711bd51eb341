"""
Arbitrary precision real and complex fields.

Each ring owns a private mpmath context, so precision is part of the ring's
context and two RealFields of different precision never share rounding state.
Raw data is an mpf (RealField) or mpc (ComplexField) created by that context.
"""

from __future__ import annotations

import logging
import operator
from typing import Any, Optional

from . import algebra_backend as kernel
from .config import load_defaults
from .context import RealContext
from .conversion import conversion
from .errors import ConversionError, DomainError
from .integer import QQ, IntegerRing, Rational, RationalField
from .ring import Element, Ring

_logger = logging.getLogger(__name__)


def _default_prec(prec: Optional[int]) -> int:
    return load_defaults().real_prec if prec is None else prec


class Real(Element):
    __slots__ = ()

    def __float__(self) -> float:
        return float(self._data)

    def __lt__(self, other: Any) -> bool:
        return self._ordered(other, operator.lt, "__gt__")

    def __le__(self, other: Any) -> bool:
        return self._ordered(other, operator.le, "__ge__")

    def __gt__(self, other: Any) -> bool:
        return self._ordered(other, operator.gt, "__lt__")

    def __ge__(self, other: Any) -> bool:
        return self._ordered(other, operator.ge, "__le__")

    def __abs__(self) -> "Real":
        return self._parent._wrap(abs(self._data))


class Complex(Element):
    __slots__ = ()

    def real(self) -> Real:
        return RealField(self._parent.precision())._wrap(self._data.real)

    def imag(self) -> Real:
        return RealField(self._parent.precision())._wrap(self._data.imag)

    def __complex__(self) -> complex:
        return complex(self._data)


class _MpField(Ring):
    """Shared behavior of RealField and ComplexField."""

    def __init__(self, prec: Optional[int] = None):
        super().__init__(RealContext(_default_prec(prec)))

    def precision(self) -> int:
        return self._context.prec

    def is_field(self) -> bool:
        return True

    def characteristic(self) -> int:
        return 0

    def _lift(self, source: Any) -> Any:
        """Exact sources (Integer, Rational, ...) through QQ, then rounded once."""
        mp = self._context.mp
        try:
            q = QQ.new(source)._data
        except ConversionError as e:
            raise self._reject(source) from e
        x = mp.mpf(q.numerator) / q.denominator
        if q.denominator & (q.denominator - 1):
            _logger.debug("round %s to %d bits", q, self._context.prec)
        return x

    def _approximations(self) -> tuple:
        """Inexact rings whose elements round into this one."""
        return ()

    def _coerces_from(self, other: Ring) -> bool:
        if other == self or isinstance(other, (IntegerRing, RationalField)):
            return True
        # rounding to fewer bits is canonical, inventing bits is not
        return isinstance(other, self._approximations()) and other.precision() >= self.precision()

    def _as_real(self, a) -> Any:
        return a

    def _compare(self, a, value: Any) -> bool:
        # exact value equality, the way float == Fraction compares
        if isinstance(value, (str, tuple)):
            return super()._compare(a, value)
        if isinstance(value, (Real, Complex)):
            return a == value._data
        if isinstance(value, (float, complex)):
            return a == value
        try:
            q = QQ.new(value)._data
        except ConversionError:
            return False
        x = self._as_real(a)
        if x is None:
            return False
        try:
            return kernel.mpf_to_fraction(x) == q
        except DomainError:
            return False

    def _zero_data(self):
        return self._context.mp.zero

    def _add(self, a, b):
        return a + b

    def _sub(self, a, b):
        return a - b

    def _neg(self, a):
        return -a

    def _mul(self, a, b):
        return a * b

    def _inv(self, a):
        if self._is_zero(a):
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        return self._context.mp.one / a

    def _is_zero(self, a) -> bool:
        return a == 0

    def _hash(self, a) -> int:
        return hash(a)

    def _format(self, a) -> str:
        mp = self._context.mp
        return mp.nstr(a, mp.dps)

    def _debug(self, a) -> str:
        return f"{self._format(a)} @ {self._context.prec} bits"


class RealField(_MpField):
    element_class = Real

    def name(self) -> str:
        return f"Real field with {self._context.prec} bits of precision"

    def __repr__(self) -> str:
        return f"RealField({self._context.prec})"

    def _coerce(self, source: Any):
        mp = self._context.mp
        if isinstance(source, Real):
            # re-round to this precision
            return mp.mpf(source._data)
        if isinstance(source, (float, str)):
            try:
                return mp.mpf(source)
            except ValueError as e:
                raise self._reject(source, "not a real literal") from e
        return self._lift(source)

    def _approximations(self) -> tuple:
        return (RealField,)

    def _one_data(self):
        return self._context.mp.one


class ComplexField(_MpField):
    element_class = Complex

    def name(self) -> str:
        return f"Complex field with {self._context.prec} bits of precision"

    def __repr__(self) -> str:
        return f"ComplexField({self._context.prec})"

    def _coerce(self, source: Any):
        mp = self._context.mp
        if isinstance(source, (Complex, Real)):
            return mp.mpc(source._data)
        if isinstance(source, (float, complex, str)):
            try:
                return mp.mpc(source)
            except ValueError as e:
                raise self._reject(source, "not a complex literal") from e
        if isinstance(source, tuple) and len(source) == 2:
            re, im = (RealField(self._context.prec).new(part)._data for part in source)
            return mp.mpc(re, im)
        return mp.mpc(self._lift(source))

    def _zero_data(self):
        return self._context.mp.mpc(0)

    def _one_data(self):
        return self._context.mp.mpc(1)

    def _inv(self, a):
        if self._is_zero(a):
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        return self._context.mp.mpc(1) / a

    def _approximations(self) -> tuple:
        return (RealField, ComplexField)

    def _as_real(self, a) -> Any:
        return a.real if a.imag == 0 else None

    def _hash(self, a) -> int:
        # hash like the host number the value equals, if any
        if a.imag == 0:
            return hash(a.real)
        z = complex(a)
        return hash(z) if z == a else hash((a.real, a.imag))


@conversion(Real, Rational, fallible=True)
def _real_to_rational(x: Real) -> Rational:
    # exact value of the binary float; infinities and NaN raise DomainError
    return QQ._wrap(kernel.mpf_to_fraction(x._data))


@conversion(Real, str)
def _real_to_str(x: Real) -> str:
    return str(x)


@conversion(Complex, str)
def _complex_to_str(x: Complex) -> str:
    return str(x)


__all__ = ["Real", "Complex", "RealField", "ComplexField"]
