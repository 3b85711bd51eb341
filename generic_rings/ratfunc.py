"""
Rational function fields Frac(R[x]) for R = ZZ or QQ.

Raw data is a pair (numerator, denominator) of polynomials in the underlying
PolyRing, kept in lowest terms by the kernel: the gcd is divided out, the
denominator has a positive leading coefficient (ZZ) or is monic (QQ), and
zero is (0, 1).  Equal functions therefore have equal data.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any, List, Tuple

from . import algebra_backend as kernel
from .context import RatFuncContext
from .conversion import conversion
from .errors import ConstructionError, ConversionError, DomainError
from .integer import QQ, ZZ, Rational, RationalField
from .poly import Poly, PolyRing
from .ring import Element, Ring

_logger = logging.getLogger(__name__)


def _fractions(p: Poly) -> List[Fraction]:
    return [Fraction(c.data) for c in p.coefficients()]


def _bracketed(text: str, *marks: str) -> str:
    return f"({text})" if any(m in text for m in marks) else text


class RatFunc(Element):
    __slots__ = ()

    def numerator(self) -> Poly:
        return self._data[0].copy()

    def denominator(self) -> Poly:
        return self._data[1].copy()

    def as_poly(self) -> Poly:
        """The numerator, when the denominator is one; DomainError otherwise."""
        num, den = self._data
        if not den.is_one():
            raise DomainError(f"{self} is not a polynomial", ring=num.parent(), value=self)
        return num.copy()

    def num_den(self) -> Tuple[Poly, Poly]:
        return self.numerator(), self.denominator()

    def var(self) -> str:
        return self._parent.var()

    def degree(self) -> int:
        """Larger of the numerator and denominator degrees."""
        num, den = self._data
        return max(num.degree(), den.degree())

    def relative_degree(self) -> int:
        num, den = self._data
        return num.degree() - den.degree()

    def evaluate(self, x: Any) -> Any:
        """
        num(x) / den(x).  Host integers and fractions are taken in QQ so the
        quotient exists; a pole raises ZeroDivisionError.
        """
        if isinstance(x, (int, Fraction)) and not isinstance(x, bool):
            x = QQ.new(x)
        num, den = self._data
        return num.evaluate(x) / den.evaluate(x)

    __call__ = evaluate


class RatFuncField(Ring):
    element_class = RatFunc

    def __init__(self, base_ring: Ring = ZZ, var: str = "x"):
        if not isinstance(base_ring, Ring) or base_ring not in (ZZ, QQ):
            raise ConstructionError(
                f"rational functions are defined over ZZ or QQ, got {base_ring!r}", value=base_ring
            )
        super().__init__(RatFuncContext(PolyRing(base_ring, var)))

    @property
    def depth(self) -> int:
        return self._context.poly_ring.depth + 1

    def numerator_ring(self) -> Ring:
        """The polynomial ring holding numerators and denominators."""
        return self._context.poly_ring

    def base_ring(self) -> Ring:
        return self._context.poly_ring.base_ring()

    def var(self) -> str:
        return self._context.poly_ring.var()

    def gen(self) -> RatFunc:
        R = self._context.poly_ring
        return self._wrap((R.gen(), R.one()))

    def name(self) -> str:
        return f"Rational function field in {self.var()} over {self.base_ring().name()}"

    def __repr__(self) -> str:
        return f"RatFuncField({self.base_ring()!r}, {self.var()!r})"

    def is_field(self) -> bool:
        return True

    def characteristic(self) -> int:
        return 0

    def _reduce(self, num: Poly, den: Poly) -> Tuple[Poly, Poly]:
        domain = "ZZ" if self.base_ring() == ZZ else "QQ"
        n, d = kernel.cancel_quotient(_fractions(num), _fractions(den), domain)
        if len(d) < den.degree() + 1:
            _logger.debug("cancelled a common factor of degree %d", den.degree() + 1 - len(d))
        R = self._context.poly_ring
        return R.new(n), R.new(d)

    def _coerce(self, source: Any) -> Tuple[Poly, Poly]:
        R = self._context.poly_ring
        try:
            if isinstance(source, RatFunc):
                num, den = (R.new(p) for p in source._data)
            elif isinstance(source, tuple) and len(source) == 2:
                num, den = R.new(source[0]), R.new(source[1])
            elif isinstance(source, (Fraction, Rational)):
                q = QQ.new(source)._data
                num, den = R.new(q.numerator), R.new(q.denominator)
            else:
                num, den = R.new(source), R.one()
        except ConversionError as e:
            raise self._reject(source, str(e)) from e
        if den.is_zero():
            raise self._reject(source, "zero denominator")
        return self._reduce(num, den)

    def _coerces_from(self, other: Ring) -> bool:
        R = self._context.poly_ring
        if other == self or isinstance(other, RationalField):
            return True
        if isinstance(other, RatFuncField):
            return other.var() == self.var() and R._coerces_from(other.numerator_ring())
        # polynomials and constants become functions with denominator one
        return other.depth < self.depth and R._coerces_from(other)

    def _zero_data(self) -> Tuple[Poly, Poly]:
        R = self._context.poly_ring
        return R.zero(), R.one()

    def _one_data(self) -> Tuple[Poly, Poly]:
        R = self._context.poly_ring
        return R.one(), R.one()

    def _add(self, a, b):
        return self._reduce(a[0] * b[1] + b[0] * a[1], a[1] * b[1])

    def _sub(self, a, b):
        return self._reduce(a[0] * b[1] - b[0] * a[1], a[1] * b[1])

    def _neg(self, a):
        return -a[0], a[1].copy()

    def _mul(self, a, b):
        return self._reduce(a[0] * b[0], a[1] * b[1])

    def _inv(self, a):
        if self._is_zero(a):
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        return self._reduce(a[1], a[0])

    def _is_zero(self, a) -> bool:
        return a[0].is_zero()

    def _eq(self, a, b) -> bool:
        return a[0] == b[0] and a[1] == b[1]

    def _hash(self, a) -> int:
        if a[1].is_one():
            # a polynomial hashes like itself
            return hash(a[0])
        return hash((a[0], a[1]))

    def _copy(self, a):
        return a[0].copy(), a[1].copy()

    def _format(self, a) -> str:
        num, den = a
        if den.is_one():
            return str(num)
        return f"{_bracketed(str(num), ' ', '/')}/{_bracketed(str(den), ' ', '*', '^')}"

    def _debug(self, a) -> str:
        R = self._context.poly_ring
        return f"{R._debug(a[0]._data)} / {R._debug(a[1]._data)}"


@conversion(RatFunc, str)
def _ratfunc_to_str(x: RatFunc) -> str:
    return str(x)


__all__ = ["RatFunc", "RatFuncField"]
