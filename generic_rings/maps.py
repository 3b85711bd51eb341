"""
Maps between rings.

A Map carries its domain and codomain rings, an image function and an
optional preimage function.  Arguments are coerced into the domain before the
image function sees them and results are coerced into the codomain, so a map
always returns elements of its codomain.  Composition follows the usual
arrow convention: ``f.compose(g)`` applies f first, then g.

TableMap is the finite version, backed by a dict.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from .errors import ConstructionError, ConversionError, DomainError, TypeMismatch
from .ring import Element, Ring

_logger = logging.getLogger(__name__)


class Map:
    def __init__(
        self,
        domain: Ring,
        codomain: Ring,
        image: Callable[[Element], Any],
        preimage: Optional[Callable[[Element], Any]] = None,
    ):
        for role, r in (("domain", domain), ("codomain", codomain)):
            if not isinstance(r, Ring):
                raise ConstructionError(f"map {role} must be a Ring, got {type(r).__name__}", value=r)
        self._domain = domain
        self._codomain = codomain
        self._image = image
        self._preimage = preimage

    def domain(self) -> Ring:
        return self._domain

    def codomain(self) -> Ring:
        return self._codomain

    def has_preimage(self) -> bool:
        return self._preimage is not None

    def image(self, x: Any) -> Element:
        return self._codomain.new(self._image(self._domain.new(x)))

    def map(self, x: Any) -> Element:
        return self.image(x)

    __call__ = image

    def preimage(self, y: Any) -> Element:
        """
        An element of the domain mapping to y.  DomainError when the map has
        no preimage function or y is outside the image.
        """
        if self._preimage is None:
            raise DomainError(f"{self!r} has no preimage", value=y)
        try:
            return self._domain.new(self._preimage(self._codomain.new(y)))
        except ConversionError as e:
            raise DomainError(f"{y} is not in the image of {self!r}", ring=self._codomain, value=y) from e

    def inv(self, y: Any) -> Element:
        return self.preimage(y)

    def inverse(self) -> "Map":
        """The map going back; only for maps with a preimage."""
        if self._preimage is None:
            raise DomainError(f"{self!r} has no preimage", value=self)
        return Map(self._codomain, self._domain, self._preimage, self._image)

    def compose(self, other: "Map") -> "Map":
        """`other` after `self`; the preimage survives when both maps have one."""
        if self._codomain != other.domain():
            raise TypeMismatch(
                f"cannot compose a map into {self._codomain.name()} with a map from {other.domain().name()}",
                ring=other.domain(),
                value=other,
            )
        _logger.debug("compose %r with %r", self, other)

        def image(x):
            return other.image(self.image(x))

        def preimage(y):
            return self.preimage(other.preimage(y))

        both = self.has_preimage() and other.has_preimage()
        return Map(self._domain, other.codomain(), image, preimage if both else None)

    @classmethod
    def identity(cls, ring: Ring) -> "Map":
        return cls(ring, ring, lambda x: x, lambda y: y)

    @classmethod
    def coercion(cls, domain: Ring, codomain: Ring) -> "Map":
        """The canonical embedding of `domain` into `codomain`."""
        if not codomain._coerces_from(domain):
            raise ConstructionError(
                f"no canonical map from {domain.name()} to {codomain.name()}", value=(domain, codomain)
            )
        return cls(domain, codomain, codomain.new, domain.new)

    def __repr__(self) -> str:
        return f"Map({self._domain.name()} -> {self._codomain.name()})"


class TableMap(Map):
    """A map given by a finite table; keys outside the table raise DomainError."""

    def __init__(
        self,
        domain: Ring,
        codomain: Ring,
        table: Dict[Any, Any],
        inverse_table: Optional[Dict[Any, Any]] = None,
    ):
        super().__init__(
            domain,
            codomain,
            self._lookup,
            None if inverse_table is None else self._lookup_inverse,
        )
        self._table = {domain.new(k): codomain.new(v) for k, v in table.items()}
        self._inverse_table = None
        if inverse_table is not None:
            self._inverse_table = {codomain.new(k): domain.new(v) for k, v in inverse_table.items()}

    def _lookup(self, x: Element) -> Element:
        try:
            return self._table[x]
        except KeyError:
            raise DomainError(f"{x} is not in the table of {self!r}", ring=self._domain, value=x) from None

    def _lookup_inverse(self, y: Element) -> Element:
        try:
            return self._inverse_table[y]
        except KeyError:
            raise DomainError(f"{y} is not in the image of {self!r}", ring=self._codomain, value=y) from None

    def __len__(self) -> int:
        return len(self._table)

    def compose(self, other: Map) -> Map:
        """Two tables compose into a table over the keys whose images `other` knows."""
        if not isinstance(other, TableMap) or self._codomain != other.domain():
            return super().compose(other)
        table = {k: other._table[v] for k, v in self._table.items() if v in other._table}
        inverse = None
        if self._inverse_table is not None and other._inverse_table is not None:
            inverse = {
                k: self._inverse_table[v] for k, v in other._inverse_table.items() if v in self._inverse_table
            }
        return TableMap(self._domain, other.codomain(), table, inverse)

    def __repr__(self) -> str:
        return f"TableMap({self._domain.name()} -> {self._codomain.name()}, {len(self._table)} entries)"


__all__ = ["Map", "TableMap"]
