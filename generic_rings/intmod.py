"""
Integers modulo n.

Raw data is the canonical residue in [0, n).  The modulus lives in the ring's
IntModContext and nowhere else; an IntMod is meaningless without it.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from typing import Any

from . import algebra_backend as kernel
from .context import IntModContext
from .conversion import conversion
from .errors import ConversionError
from .integer import ZZ, Integer, IntegerRing
from .ring import Element, Ring

_logger = logging.getLogger(__name__)


class IntMod(Element):
    __slots__ = ()

    def modulus(self) -> Integer:
        return ZZ._wrap(self._parent.context.modulus)

    def residue(self) -> int:
        """Canonical representative in [0, n)."""
        return self._data

    def __int__(self) -> int:
        return self._data


class IntModRing(Ring):
    """The ring of integers mod `n` for any integer `n >= 1`."""

    element_class = IntMod

    def __init__(self, n: Any):
        if isinstance(n, Integer):
            n = int(n)
        super().__init__(IntModContext(n))

    def modulus(self) -> Integer:
        return ZZ._wrap(self._context.modulus)

    def name(self) -> str:
        return f"Ring of integers modulo {self._context.modulus}"

    def __repr__(self) -> str:
        return f"IntModRing({self._context.modulus})"

    def characteristic(self) -> int:
        return self._context.modulus

    def is_field(self) -> bool:
        return kernel.is_prime(self._context.modulus)

    def _coerce(self, source: Any) -> int:
        n = self._context.modulus
        if isinstance(source, IntMod):
            m = source._parent.context.modulus
            # Z/m -> Z/n is a ring map only when n | m
            if m % n != 0:
                raise self._reject(source, f"modulus {n} does not divide {m}")
            if m != n:
                _logger.debug("reduce %s mod %d to mod %d", source._data, m, n)
            return source._data % n
        if isinstance(source, float):
            raise self._reject(source, "floats are not exact")
        # ints, strings, Integers, integral rationals all go through ZZ
        try:
            return ZZ.new(source)._data % n
        except ConversionError as e:
            raise self._reject(source) from e

    def _zero_data(self) -> int:
        return 0

    def _one_data(self) -> int:
        return 1 % self._context.modulus

    def _add(self, a: int, b: int) -> int:
        return (a + b) % self._context.modulus

    def _sub(self, a: int, b: int) -> int:
        return (a - b) % self._context.modulus

    def _neg(self, a: int) -> int:
        return (-a) % self._context.modulus

    def _mul(self, a: int, b: int) -> int:
        return (a * b) % self._context.modulus

    def _inv(self, a: int) -> int:
        if a == 0 and self._context.modulus != 1:
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        return kernel.inverse_mod(a, self._context.modulus)

    def _coerces_from(self, other: Ring) -> bool:
        if other == self or isinstance(other, IntegerRing):
            return True
        return isinstance(other, IntModRing) and other.context.modulus % self._context.modulus == 0

    def _compare(self, a: int, value: Any) -> bool:
        # an integer equals a residue only as its canonical lift
        if isinstance(value, (int, Integer, IntMod)):
            return a == int(value)
        if isinstance(value, Fraction):
            return value.denominator == 1 and a == value.numerator
        return super()._compare(a, value)

    def _hash(self, a: int) -> int:
        return hash(a)

    def _debug(self, a: int) -> str:
        return f"{a} mod {self._context.modulus}"


@conversion(IntMod, Integer)
def _intmod_to_integer(x: IntMod) -> Integer:
    return ZZ._wrap(x._data)
