"""
Ring contexts: the immutable defining data of a ring.

A context is built once when its ring is constructed and is then shared by
reference with every element of that ring and with every composite ring built
on top of it.  Frozen dataclasses make post-construction mutation an error.

Ownership is reference counted: an element keeps its ring alive, the ring keeps
its context alive, and a composite context holds its base ring (and therefore
the base context) directly.  Nothing here is ever copied to share it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple

from . import algebra_backend as kernel
from .errors import ConstructionError


def _check_var(var: Any) -> None:
    if not isinstance(var, str) or not var.strip():
        raise ConstructionError(f"variable name must be a non-empty string, got {var!r}", value=var)


@dataclass(frozen=True)
class UnitContext:
    """Rings with no defining data (ZZ, QQ)."""


@dataclass(frozen=True)
class IntModContext:
    modulus: int

    def __post_init__(self) -> None:
        if isinstance(self.modulus, bool) or not isinstance(self.modulus, int):
            raise ConstructionError(f"modulus must be int, got {type(self.modulus).__name__}", value=self.modulus)
        if self.modulus < 1:
            raise ConstructionError(f"modulus must be >= 1, got {self.modulus}", value=self.modulus)


@dataclass(frozen=True)
class FiniteFieldContext:
    """
    GF(p^k) in the polynomial basis of the kernel's defining polynomial.

    `kernel_field` is the kernel's field class; it is derived from (p, degree) and does
    not take part in equality.
    """

    p: int
    degree: int
    var: str
    kernel_field: Any = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        _check_var(self.var)
        object.__setattr__(self, "kernel_field", kernel.finite_field(self.p, self.degree))

    @property
    def order(self) -> int:
        return self.p ** self.degree


@dataclass(frozen=True)
class PadicContext:
    """
    Q_p with relative precision `prec`: a nonzero element is p^v * u with u a
    unit modulo p^prec.
    """

    p: int
    prec: int

    def __post_init__(self) -> None:
        if not isinstance(self.prec, int) or self.prec < 1:
            raise ConstructionError(f"p-adic precision must be int >= 1, got {self.prec!r}", value=self.prec)
        if not isinstance(self.p, int) or not kernel.is_prime(self.p):
            raise ConstructionError(f"p-adic prime must be a prime int, got {self.p!r}", value=self.p)

    @property
    def modulus(self) -> int:
        return self.p ** self.prec


@dataclass(frozen=True)
class QadicContext:
    """
    Unramified extension of Q_p of degree `degree`, defined by a monic lift of
    an irreducible polynomial over GF(p).  `modulus_poly` is low degree first.
    """

    p: int
    prec: int
    degree: int
    var: str
    modulus_poly: Tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        _check_var(self.var)
        if not isinstance(self.prec, int) or self.prec < 1:
            raise ConstructionError(f"q-adic precision must be int >= 1, got {self.prec!r}", value=self.prec)
        if not isinstance(self.degree, int) or self.degree < 1:
            raise ConstructionError(f"q-adic degree must be int >= 1, got {self.degree!r}", value=self.degree)
        if not isinstance(self.p, int) or not kernel.is_prime(self.p):
            raise ConstructionError(f"q-adic prime must be a prime int, got {self.p!r}", value=self.p)
        object.__setattr__(self, "modulus_poly", kernel.defining_polynomial(self.p, self.degree))

    @property
    def modulus(self) -> int:
        return self.p ** self.prec


@dataclass(frozen=True)
class RealContext:
    """Binary precision of RealField / ComplexField plus the private mpmath context."""

    prec: int
    mp: Any = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "mp", kernel.real_context(self.prec))


@dataclass(frozen=True)
class PolyContext:
    base_ring: Any
    var: str

    def __post_init__(self) -> None:
        _check_var(self.var)

    @property
    def base_context(self) -> Any:
        return self.base_ring.context


@dataclass(frozen=True)
class MatContext:
    base_ring: Any
    nrows: int
    ncols: int

    def __post_init__(self) -> None:
        for name in ("nrows", "ncols"):
            v = getattr(self, name)
            if isinstance(v, bool) or not isinstance(v, int) or v < 0:
                raise ConstructionError(f"{name} must be int >= 0, got {v!r}", value=v)

    @property
    def base_context(self) -> Any:
        return self.base_ring.context


@dataclass(frozen=True)
class ProductContext:
    rings: Tuple[Any, ...]

    def __post_init__(self) -> None:
        if len(self.rings) < 1:
            raise ConstructionError("a direct product needs at least one factor", value=self.rings)


@dataclass(frozen=True)
class RatFuncContext:
    """Fraction field of a univariate polynomial ring over ZZ or QQ."""

    poly_ring: Any

    @property
    def base_context(self) -> Any:
        return self.poly_ring.context
