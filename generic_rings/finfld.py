"""
Finite fields GF(p^k).

Raw data is a kernel field scalar.  Elements are written in the polynomial
basis 1, a, ..., a^(k-1) of the kernel's defining polynomial; `var` only names
the generator for display.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any, List

from . import algebra_backend as kernel
from .context import FiniteFieldContext
from .conversion import conversion
from .errors import ConversionError
from .integer import ZZ, Integer, IntegerRing
from .intmod import IntMod, IntModRing
from .ring import Element, Ring, format_terms

_logger = logging.getLogger(__name__)


class FinFldElem(Element):
    __slots__ = ()

    def coefficients(self) -> List[Integer]:
        """Coordinates in the polynomial basis, low degree first."""
        ctx = self._parent.context
        return [ZZ._wrap(c) for c in kernel.field_coefficients(self._data, ctx.p, ctx.degree)]

    def __int__(self) -> int:
        return int(self._data)


class FiniteField(Ring):
    element_class = FinFldElem

    def __init__(self, p: Any, k: int = 1, var: str = "a"):
        if isinstance(p, Integer):
            p = int(p)
        super().__init__(FiniteFieldContext(p, k, var))
        ctx = self._context
        _logger.debug("GF(%d^%d) defined by %s", ctx.p, ctx.degree, kernel.defining_polynomial(ctx.p, ctx.degree))

    def prime(self) -> Integer:
        return ZZ._wrap(self._context.p)

    def degree(self) -> int:
        return self._context.degree

    def order(self) -> Integer:
        return ZZ._wrap(self._context.order)

    def var(self) -> str:
        return self._context.var

    def gen(self) -> FinFldElem:
        ctx = self._context
        return self._wrap(kernel.field_generator(ctx.kernel_field, ctx.p, ctx.degree))

    def name(self) -> str:
        ctx = self._context
        if ctx.degree == 1:
            return f"Finite field with {ctx.p} elements"
        return f"Finite field with {ctx.p}^{ctx.degree} elements"

    def __repr__(self) -> str:
        ctx = self._context
        return f"FiniteField({ctx.p}, {ctx.degree}, {ctx.var!r})"

    def is_field(self) -> bool:
        return True

    def characteristic(self) -> int:
        return self._context.p

    def _residue(self, source: Any) -> int:
        """An integer-like source reduced mod p."""
        p = self._context.p
        if isinstance(source, IntMod):
            m = source._parent.context.modulus
            if m % p != 0:
                raise self._reject(source, f"characteristic {p} does not divide {m}")
            return source._data % p
        if isinstance(source, float):
            raise self._reject(source, "floats are not exact")
        try:
            return ZZ.new(source)._data % p
        except ConversionError as e:
            raise self._reject(source) from e

    def _coerce(self, source: Any):
        ctx = self._context
        F = ctx.kernel_field
        if isinstance(source, FinFldElem):
            # only the identity embedding is supported
            raise self._reject(source, "no embedding between distinct finite fields")
        if isinstance(source, (list, tuple)):
            if len(source) > ctx.degree:
                raise self._reject(source, f"at most {ctx.degree} coordinates")
            coeffs = [self._residue(c) for c in source]
            return kernel.field_from_coefficients(F, ctx.p, ctx.degree, coeffs)
        return F(self._residue(source))

    def _zero_data(self):
        return self._context.kernel_field(0)

    def _one_data(self):
        return self._context.kernel_field(1)

    def _add(self, a, b):
        return a + b

    def _sub(self, a, b):
        return a - b

    def _neg(self, a):
        return -a

    def _mul(self, a, b):
        return a * b

    def _inv(self, a):
        if int(a) == 0:
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        return a ** -1

    def _is_zero(self, a) -> bool:
        return int(a) == 0

    def _eq(self, a, b) -> bool:
        return int(a) == int(b)

    def _coerces_from(self, other: Ring) -> bool:
        if other == self or isinstance(other, IntegerRing):
            return True
        return isinstance(other, IntModRing) and other.context.modulus % self._context.p == 0

    def _compare(self, a, value: Any) -> bool:
        # an integer equals only the prime-field element labelled by it
        if isinstance(value, Fraction) and value.denominator == 1:
            value = value.numerator
        if isinstance(value, (int, Integer, IntMod)):
            v = int(value)
            return 0 <= v < self._context.p and int(a) == v
        return super()._compare(a, value)

    def _hash(self, a) -> int:
        return hash(int(a))

    def _copy(self, a):
        return a.copy()

    def _format(self, a) -> str:
        ctx = self._context
        coeffs = kernel.field_coefficients(a, ctx.p, ctx.degree)
        return format_terms([(i, str(c)) for i, c in enumerate(coeffs) if c], ctx.var)

    def _debug(self, a) -> str:
        return f"{self._format(a)} in GF({self._context.order})"


@conversion(FinFldElem, Integer)
def _finfld_to_integer(x: FinFldElem) -> Integer:
    # the kernel's integer label sum c_i p^i; the field context is dropped
    return ZZ._wrap(int(x._data))
