"""
Univariate polynomial rings over any ring, nested to any depth.

A PolyRing's context holds its base ring by reference; ZZ[x][y] is
PolyRing(PolyRing(ZZ, "x"), "y") and its elements are lists of ZZ[x]
elements.  Raw data is a Python list of base-ring Elements, index i holding
the coefficient of var^i.  Trailing zero coefficients may sit in storage
(set_coeff does not trim); every read goes through the normalized view.
"""

from __future__ import annotations

import logging
from itertools import zip_longest
from typing import Any, List

from .context import PolyContext
from .conversion import conversion
from .errors import ConstructionError, ConversionError, TypeMismatch, describe
from .ring import Element, Ring, format_terms

_logger = logging.getLogger(__name__)


def _check_index(i: Any) -> int:
    if isinstance(i, bool) or not isinstance(i, int):
        raise TypeError(f"coefficient index must be int, got {type(i).__name__}")
    if i < 0:
        raise IndexError(f"coefficient index must be >= 0, got {i}")
    return i


def _stripped(data: List[Element]) -> List[Element]:
    n = len(data)
    while n and data[n - 1].is_zero():
        n -= 1
    return data[:n]


class Poly(Element):
    """
    Polynomial element.  Mutable through set_coeff/normalize; hashing is by
    value, so a polynomial used as a dict key must not be mutated afterwards.
    """

    __slots__ = ()

    def base_ring(self) -> Ring:
        return self._parent.base_ring()

    def var(self) -> str:
        return self._parent.var()

    def degree(self) -> int:
        """Highest index with a nonzero coefficient; -1 for the zero polynomial."""
        return len(_stripped(self._data)) - 1

    def __len__(self) -> int:
        return self.degree() + 1

    def get_coeff(self, i: int) -> Element:
        """Coefficient of var^i, the base ring's zero beyond the degree."""
        i = _check_index(i)
        if i >= len(self._data):
            return self._parent.base_ring().zero()
        return self._data[i].copy()

    def set_coeff(self, i: int, value: Any) -> None:
        """
        Set the coefficient of var^i, padding with zeros when i lies past the
        stored coefficients.  `value` is coerced into the base ring; an
        Element of an unrelated ring raises TypeMismatch.
        """
        i = _check_index(i)
        base = self._parent.base_ring()
        try:
            c = base.new(value)
        except ConversionError as e:
            if isinstance(value, Element):
                raise TypeMismatch(
                    f"coefficient {describe(value)} does not belong to {base.name()}", ring=base, value=value
                ) from e
            raise
        data = self._data
        if i >= len(data):
            _logger.debug("extend %s coefficients from %d to %d", self._parent.var(), len(data), i + 1)
            data.extend(base.zero() for _ in range(len(data), i))
            data.append(c)
        else:
            data[i] = c

    def coefficients(self) -> List[Element]:
        """Normalized coefficient list, low degree first."""
        return [c.copy() for c in _stripped(self._data)]

    def leading_coefficient(self) -> Element:
        coeffs = _stripped(self._data)
        if not coeffs:
            return self._parent.base_ring().zero()
        return coeffs[-1].copy()

    def normalize(self) -> "Poly":
        """Drop trailing zero coefficients from storage, in place."""
        del self._data[len(_stripped(self._data)):]
        return self

    def evaluate(self, x: Any) -> Any:
        """Horner evaluation; x may be anything the coefficients act on."""
        acc: Any = self._parent.base_ring().zero()
        for c in reversed(_stripped(self._data)):
            acc = acc * x + c
        return acc

    __call__ = evaluate


class PolyRing(Ring):
    element_class = Poly

    def __init__(self, base_ring: Ring, var: str = "x"):
        if not isinstance(base_ring, Ring):
            raise ConstructionError(
                f"polynomial base must be a Ring, got {type(base_ring).__name__}", value=base_ring
            )
        super().__init__(PolyContext(base_ring, var))

    @property
    def depth(self) -> int:
        return self._context.base_ring.depth + 1

    def base_ring(self) -> Ring:
        return self._context.base_ring

    def var(self) -> str:
        return self._context.var

    def nvars(self) -> int:
        return 1

    def gen(self) -> Poly:
        base = self._context.base_ring
        return self._wrap([base.zero(), base.one()])

    def name(self) -> str:
        ctx = self._context
        return f"Univariate polynomial ring in {ctx.var} over {ctx.base_ring._nested_name()}"

    def __repr__(self) -> str:
        return f"PolyRing({self._context.base_ring!r}, {self._context.var!r})"

    def characteristic(self) -> int:
        return self._context.base_ring.characteristic()

    def _coefficient_list(self, source: Any) -> List[Element]:
        """Each entry coerced independently; any failure rejects the whole sequence."""
        base = self._context.base_ring
        out = []
        for i, item in enumerate(source):
            try:
                out.append(base.new(item))
            except ConversionError as e:
                raise self._reject(source, f"coefficient {i}: {e}") from e
        return out

    def _coerce(self, source: Any) -> List[Element]:
        base = self._context.base_ring
        if isinstance(source, Poly) and source._parent.depth == self.depth:
            if source._parent.var() != self._context.var:
                raise self._reject(source, f"variable {source._parent.var()!r} is not {self._context.var!r}")
            return self._coefficient_list(source._data)
        if isinstance(source, (list, tuple)):
            return self._coefficient_list(source)
        try:
            c = base.new(source)
        except ConversionError as e:
            raise self._reject(source, str(e)) from e
        return [c]

    def _coerces_from(self, other: Ring) -> bool:
        base = self._context.base_ring
        if other == self:
            return True
        if isinstance(other, PolyRing) and other.depth == self.depth:
            return other.var() == self._context.var and base._coerces_from(other.base_ring())
        # constants
        return other.depth < self.depth and base._coerces_from(other)

    def _compare(self, a: List[Element], value: Any) -> bool:
        if isinstance(value, (list, tuple)) or (isinstance(value, Poly) and value._parent.depth == self.depth):
            return super()._compare(a, value)
        # a scalar equals a constant polynomial the way it equals the constant
        coeffs = _stripped(a)
        if len(coeffs) > 1:
            return False
        c = coeffs[0] if coeffs else self._context.base_ring.zero()
        return c == value

    def _zero_data(self) -> List[Element]:
        return []

    def _one_data(self) -> List[Element]:
        return [self._context.base_ring.one()]

    def _add(self, a: List[Element], b: List[Element]) -> List[Element]:
        zero = self._context.base_ring.zero()
        return _stripped([x + y for x, y in zip_longest(a, b, fillvalue=zero)])

    def _sub(self, a: List[Element], b: List[Element]) -> List[Element]:
        zero = self._context.base_ring.zero()
        return _stripped([x - y for x, y in zip_longest(a, b, fillvalue=zero)])

    def _neg(self, a: List[Element]) -> List[Element]:
        return [-c for c in a]

    def _mul(self, a: List[Element], b: List[Element]) -> List[Element]:
        a, b = _stripped(a), _stripped(b)
        if not a or not b:
            return []
        zero = self._context.base_ring.zero()
        out = [zero] * (len(a) + len(b) - 1)
        for i, x in enumerate(a):
            if x.is_zero():
                continue
            for j, y in enumerate(b):
                out[i + j] = out[i + j] + x * y
        return _stripped(out)

    def _inv(self, a: List[Element]) -> List[Element]:
        coeffs = _stripped(a)
        if len(coeffs) == 1:
            # only constant units are invertible here
            return [coeffs[0].inverse()]
        return super()._inv(a)

    def _is_zero(self, a: List[Element]) -> bool:
        return all(c.is_zero() for c in a)

    def _eq(self, a: List[Element], b: List[Element]) -> bool:
        a, b = _stripped(a), _stripped(b)
        return len(a) == len(b) and all(x == y for x, y in zip(a, b))

    def _hash(self, a: List[Element]) -> int:
        coeffs = _stripped(a)
        if len(coeffs) <= 1:
            # constants hash like the base element they equal
            return hash(coeffs[0]) if coeffs else hash(self._context.base_ring.zero())
        return hash((self._context.var, tuple(coeffs)))

    def _copy(self, a: List[Element]) -> List[Element]:
        return [c.copy() for c in a]

    def _format(self, a: List[Element]) -> str:
        terms = []
        for i, c in enumerate(a):
            if c.is_zero():
                continue
            text = str(c)
            # compound coefficients (x + 1, a matrix, ...) are bracketed
            if " " in text:
                text = f"({text})"
            terms.append((i, text))
        return format_terms(terms, self._context.var)

    def _debug(self, a: List[Element]) -> str:
        base = self._context.base_ring
        return "[" + ", ".join(base._debug(c._data) for c in a) + "]"


@conversion(Poly, str)
def _poly_to_str(x: Poly) -> str:
    return str(x)
