"""Composable constructors for ring towers."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from .errors import ConstructionError
from .mat import MatSpace
from .poly import Poly, PolyRing
from .product_ring import ProductRing
from .ring import Element, Ring

_logger = logging.getLogger(__name__)


def polynomial_ring(base: Ring, *variables: str) -> PolyRing:
    """
    polynomial_ring(ZZ, "x", "y") is ZZ[x][y]: one PolyRing per variable, the
    first variable innermost.
    """
    if not variables:
        raise ConstructionError("polynomial_ring needs at least one variable", ring=base)
    if len(set(variables)) != len(variables):
        raise ConstructionError(f"repeated variable in {list(variables)}", ring=base, value=variables)
    ring = base
    for var in variables:
        ring = PolyRing(ring, var)
    _logger.debug("tower of depth %d over %s", len(variables), base)
    return ring


def polynomial_ring_with_gens(base: Ring, *variables: str) -> Tuple[PolyRing, Tuple[Poly, ...]]:
    """The tower together with each variable as an element of the top ring."""
    top = polynomial_ring(base, *variables)
    gens = []
    ring: Ring = top
    # walk down the tower, lifting each level's generator to the top
    while isinstance(ring, PolyRing) and len(gens) < len(variables):
        gens.append(top.new(ring.gen()))
        ring = ring.base_ring()
    return top, tuple(reversed(gens))


def matrix_space(base: Ring, nrows: int, ncols: Optional[int] = None) -> MatSpace:
    return MatSpace(base, nrows, nrows if ncols is None else ncols)


def product_ring(*rings: Ring) -> ProductRing:
    return ProductRing(*rings)


def parent_poly_ring(x: Element, var: str = "x") -> PolyRing:
    """Polynomial ring over the ring `x` belongs to."""
    return PolyRing(x.parent(), var)


__all__ = [
    "polynomial_ring",
    "polynomial_ring_with_gens",
    "matrix_space",
    "product_ring",
    "parent_poly_ring",
]
