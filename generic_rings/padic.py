"""
p-adic and unramified q-adic fields at fixed relative precision.

A nonzero p-adic element is stored as (v, u): the value p^v * u with u a unit
modulo p^N, N the ring's precision.  Zero is (0, 0).  The q-adic field stores
(v, (u_0, ..., u_{d-1})) the same way: coordinates modulo p^N in the basis
1, a, ..., a^(d-1), not all divisible by p.

Precision is relative and never grows: a sum that cancels leading digits
keeps N digits by padding with zeros, the usual floating-point convention.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any, List, Optional, Sequence, Tuple

from . import algebra_backend as kernel
from .config import load_defaults
from .context import PadicContext, QadicContext
from .conversion import conversion
from .errors import ConversionError, DomainError
from .integer import QQ, ZZ, Integer, IntegerRing, Rational, RationalField
from .ring import Element, Ring, format_terms

_logger = logging.getLogger(__name__)


Qdata = Tuple[int, Tuple[int, ...]]


def _default_prec(prec: Optional[int]) -> int:
    return load_defaults().padic_prec if prec is None else prec


def _split(x: int, p: int) -> Tuple[int, int]:
    """x = p^v * w with p not dividing w."""
    v = kernel.valuation(x, p)
    return v, x // p ** v


def _adic_text(p: int, v: int, unit: str, prec: int, compound: bool) -> str:
    if v == 0:
        body = unit
    else:
        if compound:
            unit = f"({unit})"
        power = str(p) if v == 1 else f"{p}^{v}"
        body = power if unit == "1" else f"{unit}*{power}"
    return f"{body} + O({p}^{v + prec})"


# =============================================================================
# Q_p
# =============================================================================


class PadicElem(Element):
    __slots__ = ()

    def valuation(self) -> int:
        """v with self = p^v * unit; DomainError for zero."""
        if self.is_zero():
            raise DomainError(f"valuation of zero in {self._parent.name()}", ring=self._parent)
        return self._data[0]

    def unit(self) -> Integer:
        """The unit part u, as its representative in [0, p^N)."""
        return ZZ._wrap(self._data[1])

    def prime(self) -> Integer:
        return ZZ._wrap(self._parent.context.p)

    def precision(self) -> int:
        return self._parent.context.prec


class PadicField(Ring):
    element_class = PadicElem

    def __init__(self, p: Any, prec: Optional[int] = None):
        if isinstance(p, Integer):
            p = int(p)
        super().__init__(PadicContext(p, _default_prec(prec)))

    def prime(self) -> Integer:
        return ZZ._wrap(self._context.p)

    def precision(self) -> int:
        return self._context.prec

    def name(self) -> str:
        return f"Field of {self._context.p}-adic numbers with precision {self._context.prec}"

    def __repr__(self) -> str:
        return f"PadicField({self._context.p}, {self._context.prec})"

    def is_field(self) -> bool:
        return True

    def characteristic(self) -> int:
        return 0

    def _from_fraction(self, q: Fraction) -> Tuple[int, int]:
        if q == 0:
            return (0, 0)
        p, mod = self._context.p, self._context.modulus
        vn, n = _split(q.numerator, p)
        vd, d = _split(q.denominator, p)
        return (vn - vd, n * kernel.inverse_mod(d, mod) % mod)

    def _coerce(self, source: Any) -> Tuple[int, int]:
        if isinstance(source, PadicElem):
            other = source._parent.context
            if other.p != self._context.p:
                raise self._reject(source, "different primes")
            # change of precision
            v, u = source._data
            return (v, u % self._context.modulus) if u else (0, 0)
        if isinstance(source, float):
            raise self._reject(source, "floats are not exact")
        try:
            q = QQ.new(source)._data
        except ConversionError as e:
            raise self._reject(source) from e
        return self._from_fraction(q)

    def _coerces_from(self, other: Ring) -> bool:
        if other == self or isinstance(other, (IntegerRing, RationalField)):
            return True
        if not isinstance(other, PadicField):
            return False
        # dropping digits is canonical, inventing them is not
        return other.context.p == self._context.p and other.precision() >= self.precision()

    def _normalize(self, v: int, u: int) -> Tuple[int, int]:
        u %= self._context.modulus
        if u == 0:
            return (0, 0)
        k, w = _split(u, self._context.p)
        return (v + k, w)

    def _zero_data(self) -> Tuple[int, int]:
        return (0, 0)

    def _one_data(self) -> Tuple[int, int]:
        return (0, 1 % self._context.modulus)

    def _add(self, a: Tuple[int, int], b: Tuple[int, int]) -> Tuple[int, int]:
        if a[1] == 0:
            return b
        if b[1] == 0:
            return a
        if a[0] > b[0]:
            a, b = b, a
        p = self._context.p
        return self._normalize(a[0], a[1] + b[1] * p ** (b[0] - a[0]))

    def _neg(self, a: Tuple[int, int]) -> Tuple[int, int]:
        if a[1] == 0:
            return a
        return (a[0], -a[1] % self._context.modulus)

    def _mul(self, a: Tuple[int, int], b: Tuple[int, int]) -> Tuple[int, int]:
        if a[1] == 0 or b[1] == 0:
            return (0, 0)
        return (a[0] + b[0], a[1] * b[1] % self._context.modulus)

    def _inv(self, a: Tuple[int, int]) -> Tuple[int, int]:
        if a[1] == 0:
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        return (-a[0], kernel.inverse_mod(a[1], self._context.modulus))

    def _is_zero(self, a: Tuple[int, int]) -> bool:
        return a[1] == 0

    def _hash(self, a: Tuple[int, int]) -> int:
        return hash((self._context.p, a))

    def _format(self, a: Tuple[int, int]) -> str:
        if a[1] == 0:
            return "0"
        return _adic_text(self._context.p, a[0], str(a[1]), self._context.prec, False)

    def _debug(self, a: Tuple[int, int]) -> str:
        return f"v={a[0]}, u={a[1]}"


@conversion(PadicElem, Rational)
def _padic_to_rational(x: PadicElem) -> Rational:
    # canonical lift: p^v * u with u in [0, p^N)
    v, u = x._data
    return QQ._wrap(Fraction(u) * Fraction(x._parent.context.p) ** v)


# =============================================================================
# Unramified extensions
# =============================================================================


class QadicElem(Element):
    __slots__ = ()

    def valuation(self) -> int:
        if self.is_zero():
            raise DomainError(f"valuation of zero in {self._parent.name()}", ring=self._parent)
        return self._data[0]

    def coefficients(self) -> List[Integer]:
        """Unit-part coordinates in the basis 1, a, ..., a^(d-1)."""
        return [ZZ._wrap(c) for c in self._data[1]]

    def precision(self) -> int:
        return self._parent.context.prec


class QadicField(Ring):
    element_class = QadicElem

    def __init__(self, p: Any, prec: Optional[int] = None, degree: int = 2, var: str = "a"):
        if isinstance(p, Integer):
            p = int(p)
        super().__init__(QadicContext(p, _default_prec(prec), degree, var))

    def prime(self) -> Integer:
        return ZZ._wrap(self._context.p)

    def precision(self) -> int:
        return self._context.prec

    def degree(self) -> int:
        return self._context.degree

    def var(self) -> str:
        return self._context.var

    def defining_polynomial(self) -> List[Integer]:
        return [ZZ._wrap(c) for c in self._context.modulus_poly]

    def gen(self) -> QadicElem:
        """
        The basis element a.  Degree 1 has the basis 1 alone, so its generator
        is one, as for FiniteField.gen on a prime field.
        """
        if self._context.degree == 1:
            return self.one()
        return self._wrap(self._from_coordinates([0, 1]))

    def name(self) -> str:
        ctx = self._context
        return (
            f"Unramified extension of degree {ctx.degree} of the {ctx.p}-adic field "
            f"in {ctx.var} with precision {ctx.prec}"
        )

    def __repr__(self) -> str:
        ctx = self._context
        return f"QadicField({ctx.p}, {ctx.prec}, {ctx.degree}, {ctx.var!r})"

    def is_field(self) -> bool:
        return True

    def characteristic(self) -> int:
        return 0

    # -- coordinate arithmetic modulo (p^N, modulus_poly) --------------------

    def _zero_coords(self) -> Tuple[int, ...]:
        return (0,) * self._context.degree

    def _poly_mul(self, a: Sequence[int], b: Sequence[int]) -> Tuple[int, ...]:
        ctx = self._context
        d, mod, m = ctx.degree, ctx.modulus, ctx.modulus_poly
        prod = [0] * (2 * d - 1)
        for i, ai in enumerate(a):
            if ai:
                for j, bj in enumerate(b):
                    prod[i + j] += ai * bj
        # m is monic of degree d
        for top in range(len(prod) - 1, d - 1, -1):
            c = prod[top]
            if c:
                for j in range(d):
                    prod[top - d + j] -= c * m[j]
                prod[top] = 0
        return tuple(c % mod for c in prod[:d])

    def _normalize(self, v: int, coords: Sequence[int]) -> Qdata:
        mod, p = self._context.modulus, self._context.p
        coords = [c % mod for c in coords]
        nonzero = [c for c in coords if c]
        if not nonzero:
            return (0, self._zero_coords())
        k = min(kernel.valuation(c, p) for c in nonzero)
        return (v + k, tuple(c // p ** k for c in coords))

    def _from_coordinates(self, coords: Sequence[int]) -> Qdata:
        full = list(coords) + [0] * (self._context.degree - len(coords))
        return self._normalize(0, full)

    def _unit_inverse(self, u: Tuple[int, ...]) -> Tuple[int, ...]:
        ctx = self._context
        y = tuple(kernel.residue_inverse(ctx.p, ctx.degree, [c % ctx.p for c in u]))
        two = (2,) + (0,) * (ctx.degree - 1)
        # Newton: y <- y * (2 - u*y), doubling the correct digits each step
        reached = 1
        while reached < ctx.prec:
            uy = self._poly_mul(u, y)
            y = self._poly_mul(y, tuple(t - s for t, s in zip(two, uy)))
            reached *= 2
        _logger.debug("unit inverse in %s lifted to %d digits", self.name(), reached)
        return y

    # -- kernel hooks ---------------------------------------------------------

    def _coerce(self, source: Any) -> Qdata:
        ctx = self._context
        if isinstance(source, QadicElem):
            other = source._parent.context
            if (other.p, other.degree, other.modulus_poly) != (ctx.p, ctx.degree, ctx.modulus_poly):
                raise self._reject(source, "different unramified extensions")
            v, coords = source._data
            return self._normalize(v, coords)
        if isinstance(source, (list, tuple)):
            if len(source) > ctx.degree:
                raise self._reject(source, f"at most {ctx.degree} coordinates")
            coords = []
            for i, c in enumerate(source):
                try:
                    coords.append(ZZ.new(c)._data)
                except ConversionError as e:
                    raise self._reject(source, f"coordinate {i} is not an integer") from e
            return self._from_coordinates(coords)
        # scalars embed through Q_p at this precision
        try:
            v, u = PadicField(ctx.p, ctx.prec)._coerce(source)
        except ConversionError as e:
            raise self._reject(source) from e
        if u == 0:
            return (0, self._zero_coords())
        return (v, (u,) + (0,) * (ctx.degree - 1))

    def _coerces_from(self, other: Ring) -> bool:
        ctx = self._context
        if other == self or isinstance(other, (IntegerRing, RationalField)):
            return True
        if isinstance(other, PadicField):
            return other.context.p == ctx.p and other.precision() >= ctx.prec
        if isinstance(other, QadicField):
            o = other.context
            return (o.p, o.degree, o.modulus_poly) == (ctx.p, ctx.degree, ctx.modulus_poly) and o.prec >= ctx.prec
        return False

    def _zero_data(self) -> Qdata:
        return (0, self._zero_coords())

    def _one_data(self) -> Qdata:
        return self._from_coordinates([1])

    def _add(self, a: Qdata, b: Qdata) -> Qdata:
        if self._is_zero(a):
            return b
        if self._is_zero(b):
            return a
        if a[0] > b[0]:
            a, b = b, a
        shift = self._context.p ** (b[0] - a[0])
        return self._normalize(a[0], [x + y * shift for x, y in zip(a[1], b[1])])

    def _neg(self, a: Qdata) -> Qdata:
        mod = self._context.modulus
        return (a[0], tuple(-c % mod for c in a[1]))

    def _mul(self, a: Qdata, b: Qdata) -> Qdata:
        if self._is_zero(a) or self._is_zero(b):
            return self._zero_data()
        # a unit times a unit is a unit: the residue field has no zero divisors
        return (a[0] + b[0], self._poly_mul(a[1], b[1]))

    def _inv(self, a: Qdata) -> Qdata:
        if self._is_zero(a):
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        return (-a[0], self._unit_inverse(a[1]))

    def _is_zero(self, a: Qdata) -> bool:
        return not any(a[1])

    def _hash(self, a: Qdata) -> int:
        return hash((self._context.p, self._context.modulus_poly, a))

    def _format(self, a: Qdata) -> str:
        if self._is_zero(a):
            return "0"
        ctx = self._context
        terms = [(i, str(c)) for i, c in enumerate(a[1]) if c]
        return _adic_text(ctx.p, a[0], format_terms(terms, ctx.var), ctx.prec, len(terms) > 1)

    def _debug(self, a: Qdata) -> str:
        return f"v={a[0]}, coords={list(a[1])}"


@conversion(QadicElem, str)
def _qadic_to_str(x: QadicElem) -> str:
    return str(x)
