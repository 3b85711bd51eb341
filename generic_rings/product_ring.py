"""
Direct products R1 x ... x Rn with componentwise arithmetic.

Raw data is a tuple holding one Element of each factor ring.
"""

from __future__ import annotations

from math import gcd
from typing import Any, List, Tuple

from .context import ProductContext
from .conversion import conversion
from .errors import ConstructionError, ConversionError, DomainError
from .ring import Element, Ring


class ProductElem(Element):
    __slots__ = ()

    def get_coeff(self, i: int) -> Element:
        """Component i."""
        if isinstance(i, bool) or not isinstance(i, int):
            raise TypeError(f"component index must be int, got {type(i).__name__}")
        n = len(self._data)
        if not 0 <= i < n:
            raise IndexError(f"component {i} of a {n}-fold product")
        return self._data[i].copy()

    def components(self) -> List[Element]:
        return [c.copy() for c in self._data]

    def __len__(self) -> int:
        return len(self._data)


class ProductRing(Ring):
    element_class = ProductElem

    def __init__(self, *rings: Ring):
        for r in rings:
            if not isinstance(r, Ring):
                raise ConstructionError(f"product factor must be a Ring, got {type(r).__name__}", value=r)
        super().__init__(ProductContext(tuple(rings)))

    @property
    def depth(self) -> int:
        return max(r.depth for r in self._context.rings) + 1

    def factors(self) -> Tuple[Ring, ...]:
        return self._context.rings

    def name(self) -> str:
        return "Direct product of " + " x ".join(f"({r.name()})" for r in self._context.rings)

    def __repr__(self) -> str:
        return "ProductRing(" + ", ".join(repr(r) for r in self._context.rings) + ")"

    def characteristic(self) -> int:
        chars = [r.characteristic() for r in self._context.rings]
        if 0 in chars:
            return 0
        lcm = 1
        for c in chars:
            lcm = lcm * c // gcd(lcm, c)
        return lcm

    def _coerce(self, source: Any) -> Tuple[Element, ...]:
        rings = self._context.rings
        if isinstance(source, ProductElem) and source._parent.depth == self.depth:
            source = source._data
        if isinstance(source, (list, tuple)):
            if len(source) != len(rings):
                raise self._reject(source, f"expected {len(rings)} components")
            out = []
            for i, (r, item) in enumerate(zip(rings, source)):
                try:
                    out.append(r.new(item))
                except ConversionError as e:
                    raise self._reject(source, f"component {i}: {e}") from e
            return tuple(out)
        # a scalar embeds diagonally
        try:
            return tuple(r.new(source) for r in rings)
        except ConversionError as e:
            raise self._reject(source, str(e)) from e

    def _coerces_from(self, other: Ring) -> bool:
        rings = self._context.rings
        if other == self:
            return True
        if isinstance(other, ProductRing) and other.depth == self.depth:
            theirs = other.factors()
            return len(theirs) == len(rings) and all(r._coerces_from(s) for r, s in zip(rings, theirs))
        # the diagonal embedding
        return other.depth < self.depth and all(r._coerces_from(other) for r in rings)

    def _compare(self, a, value: Any) -> bool:
        if isinstance(value, (list, tuple)) or (isinstance(value, ProductElem) and value._parent.depth == self.depth):
            return super()._compare(a, value)
        return all(x == value for x in a)

    def _zero_data(self) -> Tuple[Element, ...]:
        return tuple(r.zero() for r in self._context.rings)

    def _one_data(self) -> Tuple[Element, ...]:
        return tuple(r.one() for r in self._context.rings)

    def _add(self, a, b):
        return tuple(x + y for x, y in zip(a, b))

    def _sub(self, a, b):
        return tuple(x - y for x, y in zip(a, b))

    def _neg(self, a):
        return tuple(-x for x in a)

    def _mul(self, a, b):
        return tuple(x * y for x, y in zip(a, b))

    def _inv(self, a):
        if self._is_zero(a):
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        if any(x.is_zero() for x in a):
            raise DomainError(f"{self._format(a)} is not a unit in {self.name()}", ring=self, value=a)
        return tuple(x.inverse() for x in a)

    def _is_zero(self, a) -> bool:
        return all(x.is_zero() for x in a)

    def _eq(self, a, b) -> bool:
        return all(x == y for x, y in zip(a, b))

    def _hash(self, a) -> int:
        hashes = [hash(x) for x in a]
        if all(h == hashes[0] for h in hashes):
            # a diagonal element hashes like the scalar it may equal
            return hashes[0]
        return hash(tuple(hashes))

    def _copy(self, a):
        return tuple(x.copy() for x in a)

    def _format(self, a) -> str:
        return "(" + ", ".join(str(x) for x in a) + ")"

    def _debug(self, a) -> str:
        return "(" + ", ".join(r._debug(x._data) for r, x in zip(self._context.rings, a)) + ")"


@conversion(ProductElem, str)
def _product_elem_to_str(x: ProductElem) -> str:
    return str(x)
