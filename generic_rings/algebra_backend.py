"""Arithmetic kernel facade.

The ring framework never calls a numeric library directly; it goes through the
small, deterministic API below.  The kernel is assembled from:

  - ``galois``  finite fields GF(p^k) and their defining polynomials
  - ``sympy``   primality, integer factorization, polynomial factorization and gcd
  - ``mpmath``  arbitrary precision real/complex numbers, one context per ring
  - ``numpy``   object-dtype storage for matrices

Integers and rationals are plain ``int`` and ``fractions.Fraction``.
"""

from __future__ import annotations

from fractions import Fraction
from functools import lru_cache
from typing import Dict, List, Sequence, Tuple

import galois
import mpmath
import numpy as _np
import sympy

from .errors import ConstructionError, DomainError


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------


def is_prime(n: int) -> bool:
    return bool(sympy.isprime(int(n)))


def inverse_mod(a: int, n: int) -> int:
    """a^{-1} mod n; DomainError when gcd(a, n) != 1."""
    try:
        return pow(int(a), -1, int(n))
    except ValueError as e:
        raise DomainError(f"{a} is not invertible modulo {n}", value=a) from e


def valuation(n: int, p: int) -> int:
    """
    p-adic valuation v_p(n) for integers.

    v_p(0) is undefined; callers decide what zero means in their precision.
    """
    if n == 0:
        raise DomainError("v_p(0) is undefined", value=n)
    x = abs(int(n))
    v = 0
    while x % p == 0:
        x //= p
        v += 1
    return v


def factor_integer(n: int) -> Dict[int, int]:
    """{prime: exponent} in increasing order; -1 leads with exponent 1 for negative n."""
    if n == 0:
        raise DomainError("0 has no factorization", value=n)
    return {int(k): int(v) for k, v in sorted(sympy.factorint(int(n)).items())}


# ---------------------------------------------------------------------------
# Finite fields
# ---------------------------------------------------------------------------


@lru_cache(maxsize=None)
def finite_field(p: int, k: int):
    """The kernel field class for GF(p^k)."""
    if not isinstance(k, int) or k < 1:
        raise ConstructionError(f"finite field degree must be int >= 1, got {k!r}", value=k)
    if not is_prime(p):
        raise ConstructionError(f"finite field characteristic must be prime, got {p!r}", value=p)
    try:
        return galois.GF(int(p) ** int(k))
    except ValueError as e:
        raise ConstructionError(f"cannot construct GF({p}^{k}): {e}", value=(p, k)) from e


def field_generator(F, p: int, k: int):
    """
    x in the polynomial basis of GF(p^k).  The kernel's integer representation
    stores sum c_i p^i, so x is the element with integer label p.  The prime
    field is generated by 1.
    """
    return F(p) if k > 1 else F(1)


def field_from_coefficients(F, p: int, k: int, coeffs: Sequence[int]):
    """sum c_i x^i, reduced by the field's defining polynomial (Horner)."""
    g = field_generator(F, p, k)
    acc = F(0)
    for c in reversed(list(coeffs)):
        acc = acc * g + F(int(c) % p)
    return acc


def field_coefficients(x, p: int, k: int) -> List[int]:
    """Coefficients c_0..c_{k-1} of a field element, read from its integer label."""
    label = int(x)
    out = []
    for _ in range(k):
        out.append(label % p)
        label //= p
    return out


def defining_polynomial(p: int, k: int) -> Tuple[int, ...]:
    """
    Monic irreducible polynomial of degree k over GF(p), coefficients low
    degree first.  Degree one uses x itself.
    """
    if k == 1:
        return (0, 1)
    F = finite_field(p, k)
    coeffs = [int(c) for c in F.irreducible_poly.coeffs]
    return tuple(reversed(coeffs))


def residue_inverse(p: int, k: int, coeffs: Sequence[int]) -> List[int]:
    """Inverse of sum c_i x^i in GF(p^k), as coefficients mod p."""
    F = finite_field(p, k)
    x = field_from_coefficients(F, p, k, coeffs)
    if int(x) == 0:
        raise DomainError("residue is zero; element is not a unit", value=tuple(coeffs))
    return field_coefficients(x ** -1, p, k)


# ---------------------------------------------------------------------------
# Real / complex numbers
# ---------------------------------------------------------------------------


def real_context(prec: int):
    """A private mpmath context with `prec` bits; never the global mpmath.mp."""
    if not isinstance(prec, int) or prec < 2:
        raise ConstructionError(f"precision must be int >= 2 bits, got {prec!r}", value=prec)
    ctx = mpmath.MPContext()
    ctx.prec = prec
    return ctx


def mpf_to_fraction(x) -> Fraction:
    """Exact value of a finite binary float."""
    if not mpmath.isfinite(x):
        raise DomainError(f"{x} has no rational value", value=x)
    sign, man, exp, _bc = x._mpf_
    man = -int(man) if sign else int(man)
    exp = int(exp)
    if exp >= 0:
        return Fraction(man * (1 << exp))
    return Fraction(man, 1 << -exp)


# ---------------------------------------------------------------------------
# Matrices
# ---------------------------------------------------------------------------


def object_matrix(entries: Sequence, nrows: int, ncols: int):
    """
    Row-major entries into an (nrows, ncols) object array.  Cells are assigned
    one by one so numpy never tries to iterate a composite entry.
    """
    if len(entries) != nrows * ncols:
        raise ValueError(f"expected {nrows * ncols} entries, got {len(entries)}")
    data = _np.empty((nrows, ncols), dtype=object)
    for idx, entry in enumerate(entries):
        data[idx // ncols, idx % ncols] = entry
    return data


# ---------------------------------------------------------------------------
# Polynomial factorization and cancellation
# ---------------------------------------------------------------------------


def _sympy_to_fraction(c) -> Fraction:
    return Fraction(int(c.p), int(c.q))


def factor_polynomial(
    coeffs: Sequence[Fraction], domain: str
) -> Tuple[Fraction, List[Tuple[List[Fraction], int]]]:
    """
    Factor sum c_i x^i over ZZ or QQ.

    Returns (content, [(factor coefficients low degree first, multiplicity)]).
    """
    if domain not in ("ZZ", "QQ"):
        raise DomainError(f"polynomial factorization supports ZZ and QQ, got {domain}", value=domain)
    if not any(coeffs):
        raise DomainError("the zero polynomial has no factorization", value=list(coeffs))
    x = sympy.Symbol("x")
    dense = [sympy.Rational(c.numerator, c.denominator) for c in reversed(list(coeffs))]
    content, factors = sympy.Poly(dense, x, domain=domain).factor_list()
    out = []
    for f, mult in factors:
        out.append(([_sympy_to_fraction(c) for c in reversed(f.all_coeffs())], int(mult)))
    return _sympy_to_fraction(sympy.Rational(content)), out


def _dense(coeffs: Sequence[Fraction], domain: str):
    x = sympy.Symbol("x")
    dense = [sympy.Rational(c.numerator, c.denominator) for c in reversed(list(coeffs))] or [0]
    return sympy.Poly(dense, x, domain=domain)


def cancel_quotient(
    num: Sequence[Fraction], den: Sequence[Fraction], domain: str
) -> Tuple[List[Fraction], List[Fraction]]:
    """
    num/den in lowest terms over ZZ or QQ: the gcd divided out and the
    denominator's leading coefficient made positive (ZZ) or one (QQ).
    Coefficients are low degree first; zero is ([], [1]).
    """
    if domain not in ("ZZ", "QQ"):
        raise DomainError(f"rational functions support ZZ and QQ, got {domain}", value=domain)
    p, q = _dense(num, domain), _dense(den, domain)
    if q.is_zero:
        raise ZeroDivisionError("zero denominator")
    if p.is_zero:
        return [], [Fraction(1)]
    g = p.gcd(q)
    p, q = p.exquo(g), q.exquo(g)
    lc = q.LC()
    if domain == "QQ":
        p, q = p.quo_ground(lc), q.quo_ground(lc)
    elif lc < 0:
        p, q = -p, -q
    return (
        [_sympy_to_fraction(c) for c in reversed(p.all_coeffs())],
        [_sympy_to_fraction(c) for c in reversed(q.all_coeffs())],
    )


__all__ = [
    "is_prime",
    "inverse_mod",
    "valuation",
    "factor_integer",
    "finite_field",
    "field_generator",
    "field_from_coefficients",
    "field_coefficients",
    "defining_polynomial",
    "residue_inverse",
    "real_context",
    "mpf_to_fraction",
    "object_matrix",
    "factor_polynomial",
    "cancel_quotient",
]
