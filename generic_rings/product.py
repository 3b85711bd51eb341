"""
Formal products: a carrier -> exponent mapping under multiplication.

`Product(mapping)` is the raw constructor and stores the mapping as given,
zero exponents included.  Equality, hashing, iteration and display work on the
normalized mapping (zero exponents dropped), so Product({a: 1, b: 0}) equals
Product.from_value(a).  A missing key has exponent 0.

`factor(x)` builds Products from the kernel's factorizations of integers,
rationals and polynomials over ZZ / QQ.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from . import algebra_backend as kernel
from .errors import DomainError, describe
from .integer import QQ, ZZ, Integer, Rational
from .poly import Poly
from .ring import Element

_logger = logging.getLogger(__name__)


def _exponent(e: Any) -> int:
    if isinstance(e, Integer):
        return int(e)
    if isinstance(e, bool) or not isinstance(e, int):
        raise TypeError(f"exponent must be int, got {type(e).__name__}")
    return e


class Product:
    __slots__ = ("_factors",)

    def __init__(self, factors: Optional[Mapping[Any, Any]] = None):
        self._factors: Dict[Any, int] = {}
        for key, e in (factors or {}).items():
            self._factors[key] = _exponent(e)

    @classmethod
    def from_value(cls, value: Any, exponent: Any = 1) -> "Product":
        return cls({value: exponent})

    @classmethod
    def identity(cls) -> "Product":
        return cls()

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def exponent(self, key: Any) -> int:
        return self._factors.get(key, 0)

    def normalized(self) -> "Product":
        return Product({k: e for k, e in self._factors.items() if e != 0})

    def items(self) -> List[Tuple[Any, int]]:
        return [(k, e) for k, e in self._factors.items() if e != 0]

    def keys(self) -> List[Any]:
        return [k for k, _ in self.items()]

    def raw(self) -> Dict[Any, int]:
        """The stored mapping, zero exponents included."""
        return dict(self._factors)

    def __len__(self) -> int:
        return len(self.items())

    def __iter__(self) -> Iterator[Any]:
        return iter(self.keys())

    def __contains__(self, key: Any) -> bool:
        return self.exponent(key) != 0

    # ------------------------------------------------------------------
    # monoid structure
    # ------------------------------------------------------------------

    def _merged(self, other: "Product", sign: int) -> Dict[Any, int]:
        out = dict(self._factors)
        for key, e in other._factors.items():
            out[key] = out.get(key, 0) + sign * e
        return out

    def _as_product(self, other: Any) -> "Product":
        return other if isinstance(other, Product) else Product.from_value(other)

    def __mul__(self, other: Any) -> "Product":
        return Product(self._merged(self._as_product(other), 1))

    def __rmul__(self, other: Any) -> "Product":
        return Product(self._as_product(other)._merged(self, 1))

    def __imul__(self, other: Any) -> "Product":
        self._factors = self._merged(self._as_product(other), 1)
        return self

    def __truediv__(self, other: Any) -> "Product":
        return Product(self._merged(self._as_product(other), -1))

    def __pow__(self, n: Any) -> "Product":
        n = _exponent(n)
        return Product({k: e * n for k, e in self._factors.items()})

    def __eq__(self, other: Any) -> Any:
        if not isinstance(other, Product):
            return NotImplemented
        return dict(self.items()) == dict(other.items())

    def __hash__(self) -> int:
        return hash(frozenset(self.items()))

    def evaluate(self, unit: Any = None) -> Any:
        """
        Multiply the factors back out with the carriers' own arithmetic,
        starting from `unit` when given.  The empty product without a unit
        is the integer 1.
        """
        acc = unit
        for key, e in self.items():
            term = key ** e
            acc = term if acc is None else acc * term
        return 1 if acc is None else acc

    def __str__(self) -> str:
        parts = []
        for key, e in self.items():
            text = str(key)
            if " " in text or (e != 1 and text.startswith("-")):
                text = f"({text})"
            parts.append(text if e == 1 else f"{text}^{e}")
        return " * ".join(parts) if parts else "1"

    def __repr__(self) -> str:
        return f"Product({self._factors!r})"


# =============================================================================
# Factorization
# =============================================================================


def _factor_rational(q: Fraction) -> Product:
    if q == 0:
        raise DomainError("0 has no factorization", ring=QQ, value=q)
    out: Dict[Any, int] = {}
    if q.numerator != 1:
        for p, e in kernel.factor_integer(q.numerator).items():
            out[QQ(p)] = e
    if q.denominator != 1:
        for p, e in kernel.factor_integer(q.denominator).items():
            out[QQ(p)] = -e
    return Product(out)


def _factor_poly(f: Poly) -> Product:
    ring = f.parent()
    base = ring.base_ring()
    if base == ZZ:
        domain = "ZZ"
    elif base == QQ:
        domain = "QQ"
    else:
        raise DomainError(f"cannot factor polynomials over {base.name()}", ring=ring, value=f)
    coeffs = [Fraction(c.data) for c in f.coefficients()]
    if not coeffs:
        raise DomainError("the zero polynomial has no factorization", ring=ring, value=f)
    content, factors = kernel.factor_polynomial(coeffs, domain)
    out: Dict[Any, int] = {}
    if content != 1:
        out[ring.new(content)] = 1
    for fc, mult in factors:
        out[ring.new(fc)] = mult
    _logger.debug("factor %s: %d factor(s), content %s", f, len(factors), content)
    return Product(out)


def factor(x: Any) -> Product:
    """
    Formal factorization of an integer, a rational or a polynomial over ZZ or
    QQ.  The sign of a negative integer appears as the factor -1; polynomial
    content other than 1 appears as a constant factor.  Rational denominators
    contribute negative exponents.
    """
    if isinstance(x, Poly):
        return _factor_poly(x)
    if isinstance(x, (Integer, int)) and not isinstance(x, bool):
        n = int(x)
        if n == 0:
            raise DomainError("0 has no factorization", ring=ZZ, value=x)
        return Product({ZZ(p): e for p, e in kernel.factor_integer(n).items()})
    if isinstance(x, (Rational, Fraction)):
        return _factor_rational(Fraction(x.data) if isinstance(x, Element) else x)
    raise DomainError(f"cannot factor {describe(x)}", value=x)


__all__ = ["Product", "factor"]
