"""
generic_rings: rings, their elements, composite rings built over any ring,
a conversion graph between representations, maps between rings, and formal
products.

    >>> from generic_rings import ZZ, PolyRing
    >>> R = PolyRing(ZZ, "x")
    >>> p = R.new(0)
    >>> p.set_coeff(2, 1); p.set_coeff(5, 14)
    >>> p.degree()
    5

Importing the package registers every declared conversion on GRAPH.
"""

from .builders import matrix_space, parent_poly_ring, polynomial_ring, polynomial_ring_with_gens, product_ring
from .config import RingDefaults, configure_logging, load_defaults
from .context import (
    FiniteFieldContext,
    IntModContext,
    MatContext,
    PadicContext,
    PolyContext,
    ProductContext,
    QadicContext,
    RatFuncContext,
    RealContext,
    UnitContext,
)
from .conversion import GRAPH, Conversion, ConversionGraph, ConversionPath, conversion, convert
from .errors import ConstructionError, ConversionError, DomainError, RingError, TypeMismatch
from .finfld import FinFldElem, FiniteField
from .integer import QQ, ZZ, Integer, IntegerRing, Rational, RationalField
from .intmod import IntMod, IntModRing
from .maps import Map, TableMap
from .mat import Mat, MatSpace
from .padic import PadicElem, PadicField, QadicElem, QadicField
from .poly import Poly, PolyRing
from .product import Product, factor
from .product_ring import ProductElem, ProductRing
from .ratfunc import RatFunc, RatFuncField
from .real import Complex, ComplexField, Real, RealField
from .ring import Element, Ring

__version__ = "0.1.0"

__all__ = [
    # protocol
    "Ring",
    "Element",
    # base rings
    "IntegerRing",
    "Integer",
    "ZZ",
    "RationalField",
    "Rational",
    "QQ",
    "IntModRing",
    "IntMod",
    "FiniteField",
    "FinFldElem",
    "PadicField",
    "PadicElem",
    "QadicField",
    "QadicElem",
    "RealField",
    "Real",
    "ComplexField",
    "Complex",
    # composite rings
    "PolyRing",
    "Poly",
    "MatSpace",
    "Mat",
    "ProductRing",
    "ProductElem",
    "RatFuncField",
    "RatFunc",
    "polynomial_ring",
    "polynomial_ring_with_gens",
    "matrix_space",
    "product_ring",
    "parent_poly_ring",
    # contexts
    "UnitContext",
    "IntModContext",
    "FiniteFieldContext",
    "PadicContext",
    "QadicContext",
    "RealContext",
    "PolyContext",
    "MatContext",
    "ProductContext",
    "RatFuncContext",
    # maps
    "Map",
    "TableMap",
    # conversions
    "GRAPH",
    "Conversion",
    "ConversionGraph",
    "ConversionPath",
    "conversion",
    "convert",
    # products
    "Product",
    "factor",
    # errors
    "RingError",
    "ConstructionError",
    "ConversionError",
    "TypeMismatch",
    "DomainError",
    # config
    "RingDefaults",
    "load_defaults",
    "configure_logging",
]
