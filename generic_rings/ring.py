"""
Ring / Element protocol shared by every structure in the package.

A Ring is the structure itself: it owns an immutable context and manufactures
elements bound to it.  An Element is a pair (parent ring, raw data); the raw
data means nothing without the context, so every arithmetic operation is
routed through the parent's kernel hooks:

    _coerce(source) -> data      the single coercion point used by new()
    _zero_data(), _one_data()
    _add, _sub, _mul, _neg, _inv
    _is_zero, _eq, _hash
    _format (short display), _debug (verbose display), _copy
    _coerces_from(ring)          canonical embeddings used by operators
    _compare(data, value)        equality against a foreign value

Binary operators work in the larger of the two rings, whichever side it is
on: a deeper composite ring (a polynomial over this ring, say) or a ring of
the same depth that embeds this one (ZZ into QQ, ZZ into Z/n).  The left
operand hands the whole operation to the other element's reflected method
in that case, so ``x * y`` and ``y * x`` land in the same ring.  Operators
only use canonical embeddings; lossy conversions (IntMod -> Integer) are
reachable through an explicit ``new`` or ``to`` only.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Tuple, Type

from .conversion import GRAPH
from .errors import ConversionError, DomainError, TypeMismatch, describe

_logger = logging.getLogger(__name__)


class Ring(ABC):
    element_class: Type["Element"]
    # Nesting level of composite rings; base rings are 0.
    depth: int = 0

    def __init__(self, context: Any):
        self._context = context
        _logger.debug("init %s", self)

    @classmethod
    def init(cls, *args: Any, **kwargs: Any) -> "Ring":
        return cls(*args, **kwargs)

    @property
    def context(self) -> Any:
        return self._context

    # ------------------------------------------------------------------
    # construction
    # ------------------------------------------------------------------

    def new(self, source: Any) -> "Element":
        """
        Element of this ring built from `source`: a host scalar, a string, a
        coefficient sequence, or an element of this or a convertible ring.
        """
        if isinstance(source, Element) and source._parent == self:
            return self._wrap(self._copy(source._data))
        try:
            data = self._coerce(source)
        except DomainError as e:
            raise ConversionError(
                f"cannot interpret {describe(source)} in {self.name()}: {e}", ring=self, value=source
            ) from e
        return self._wrap(data)

    def __call__(self, source: Any) -> "Element":
        return self.new(source)

    def _wrap(self, data: Any) -> "Element":
        return self.element_class(self, data)

    def default(self) -> "Element":
        """The additive identity."""
        return self.zero()

    def zero(self) -> "Element":
        return self._wrap(self._zero_data())

    def one(self) -> "Element":
        return self._wrap(self._one_data())

    def _reject(self, source: Any, reason: str = "") -> ConversionError:
        msg = f"cannot interpret {describe(source)} in {self.name()}"
        if reason:
            msg = f"{msg}: {reason}"
        return ConversionError(msg, ring=self, value=source)

    def _coerce_via_graph(self, source: Any) -> Any:
        """
        Bridge from another ring's element through a declared conversion to
        this ring's element class.  Only context-free targets (ZZ, QQ) are
        graph nodes, so this is the route for Element -> Integer/Rational.
        """
        if not isinstance(source, Element) or not GRAPH.can_convert(type(source), self.element_class):
            raise self._reject(source)
        converted = GRAPH.convert(source, self.element_class)
        if converted._parent != self:
            raise self._reject(source, f"converts into {converted._parent.name()}")
        return converted._data

    # ------------------------------------------------------------------
    # identity and display
    # ------------------------------------------------------------------

    @abstractmethod
    def name(self) -> str:
        """Canonical name reflecting the ring's composition."""

    def _nested_name(self) -> str:
        """Name as it appears inside a composite ring's name."""
        return f"({self.name()})" if self.depth > 0 else self.name()

    def __str__(self) -> str:
        return self.name()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._context!r})"

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        return type(self) is type(other) and self._context == other._context

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._context))

    def is_field(self) -> bool:
        return False

    @abstractmethod
    def characteristic(self) -> int:
        """Additive order of one, 0 when infinite."""

    # ------------------------------------------------------------------
    # composition shorthands
    # ------------------------------------------------------------------

    def poly_ring(self, var: str = "x") -> "Ring":
        """Univariate polynomial ring over this ring."""
        from .poly import PolyRing

        return PolyRing(self, var)

    def mat_space(self, nrows: int, ncols: Optional[int] = None) -> "Ring":
        from .mat import MatSpace

        return MatSpace(self, nrows, nrows if ncols is None else ncols)

    # ------------------------------------------------------------------
    # kernel hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _coerce(self, source: Any) -> Any:
        ...

    @abstractmethod
    def _zero_data(self) -> Any:
        ...

    @abstractmethod
    def _one_data(self) -> Any:
        ...

    @abstractmethod
    def _add(self, a: Any, b: Any) -> Any:
        ...

    @abstractmethod
    def _neg(self, a: Any) -> Any:
        ...

    @abstractmethod
    def _mul(self, a: Any, b: Any) -> Any:
        ...

    def _sub(self, a: Any, b: Any) -> Any:
        return self._add(a, self._neg(b))

    def _inv(self, a: Any) -> Any:
        if self._is_zero(a):
            raise ZeroDivisionError(f"division by zero in {self.name()}")
        raise DomainError(f"{self._format(a)} is not a unit in {self.name()}", ring=self, value=a)

    def _is_zero(self, a: Any) -> bool:
        return self._eq(a, self._zero_data())

    def _eq(self, a: Any, b: Any) -> bool:
        return a == b

    def _hash(self, a: Any) -> int:
        return hash(a)

    def _format(self, a: Any) -> str:
        return str(a)

    def _debug(self, a: Any) -> str:
        return self._format(a)

    def _copy(self, a: Any) -> Any:
        return a

    def _coerces_from(self, other: "Ring") -> bool:
        """
        Whether every element of `other` embeds canonically in this ring.
        Only these rings take part in mixed operators; anything else needs
        an explicit `new`.
        """
        return other == self

    def _compare(self, a: Any, value: Any) -> bool:
        """Equality of raw data `a` with a value from outside this ring."""
        try:
            b = self._coerce(value)
        except (ConversionError, DomainError, TypeMismatch):
            return False
        return self._eq(a, b)


class Element:
    __slots__ = ("_parent", "_data")

    def __init__(self, parent: Ring, data: Any):
        self._parent = parent
        self._data = data

    def parent(self) -> Ring:
        return self._parent

    @property
    def context(self) -> Any:
        return self._parent.context

    @property
    def data(self) -> Any:
        return self._data

    def is_zero(self) -> bool:
        return self._parent._is_zero(self._data)

    def is_one(self) -> bool:
        return self._parent._eq(self._data, self._parent._one_data())

    def copy(self) -> "Element":
        return self._parent._wrap(self._parent._copy(self._data))

    def to(self, target: type) -> Any:
        """Convert along the declared conversion graph."""
        return GRAPH.convert(self, target)

    # ------------------------------------------------------------------
    # operand coercion
    # ------------------------------------------------------------------

    def _defers_to(self, other: Any) -> bool:
        """True when the operation belongs in `other`'s ring rather than ours."""
        if not isinstance(other, Element):
            return False
        mine, theirs = self._parent, other._parent
        if theirs == mine or theirs.depth < mine.depth:
            return False
        if theirs.depth > mine.depth:
            return True
        return theirs._coerces_from(mine) and not mine._coerces_from(theirs)

    def _operand(self, other: Any) -> Any:
        """Raw data of `other` in this element's ring; TypeMismatch when it has none."""
        parent = self._parent
        if isinstance(other, Element):
            if other._parent == parent:
                return other._data
            if not parent._coerces_from(other._parent):
                raise TypeMismatch(
                    f"no canonical map from {other._parent.name()} to {parent.name()}",
                    ring=parent,
                    value=other,
                )
        try:
            return parent._coerce(other)
        except (ConversionError, DomainError) as e:
            raise TypeMismatch(
                f"cannot combine {describe(other)} with an element of {parent.name()}",
                ring=parent,
                value=other,
            ) from e

    def _binary(self, other: Any, op: str, mirror: str) -> Any:
        if self._defers_to(other):
            return getattr(other, mirror)(self)
        b = self._operand(other)
        parent = self._parent
        return parent._wrap(getattr(parent, op)(self._data, b))

    def _reflected(self, other: Any, op: str) -> Any:
        # reached from a host value on the left, or from _binary above
        if self._defers_to(other):
            return NotImplemented
        b = self._operand(other)
        parent = self._parent
        return parent._wrap(getattr(parent, op)(b, self._data))

    def _ordered(self, other: Any, op: Any, mirror: str) -> bool:
        if self._defers_to(other):
            return getattr(other, mirror)(self)
        return op(self._data, self._operand(other))

    def __add__(self, other: Any) -> Any:
        return self._binary(other, "_add", "__radd__")

    def __radd__(self, other: Any) -> Any:
        return self._reflected(other, "_add")

    def __sub__(self, other: Any) -> Any:
        return self._binary(other, "_sub", "__rsub__")

    def __rsub__(self, other: Any) -> Any:
        return self._reflected(other, "_sub")

    def __mul__(self, other: Any) -> Any:
        return self._binary(other, "_mul", "__rmul__")

    def __rmul__(self, other: Any) -> Any:
        return self._reflected(other, "_mul")

    def __neg__(self) -> "Element":
        return self._parent._wrap(self._parent._neg(self._data))

    def __pos__(self) -> "Element":
        return self.copy()

    def inverse(self) -> "Element":
        return self._parent._wrap(self._parent._inv(self._data))

    def __truediv__(self, other: Any) -> Any:
        if self._defers_to(other):
            return other.__rtruediv__(self)
        b = self._operand(other)
        parent = self._parent
        return parent._wrap(parent._mul(self._data, parent._inv(b)))

    def __rtruediv__(self, other: Any) -> Any:
        if self._defers_to(other):
            return NotImplemented
        b = self._operand(other)
        parent = self._parent
        return parent._wrap(parent._mul(b, parent._inv(self._data)))

    def __pow__(self, n: Any) -> "Element":
        # square-and-multiply
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"exponent must be int, got {type(n).__name__}")
        base = self if n >= 0 else self.inverse()
        n = abs(n)
        parent = self._parent
        result = parent._one_data()
        square = base._data
        while n:
            if n & 1:
                result = parent._mul(result, square)
            n >>= 1
            if n:
                square = parent._mul(square, square)
        return parent._wrap(result)

    def __eq__(self, other: Any) -> bool:
        # symmetric: both orders compare in the same ring
        parent = self._parent
        if isinstance(other, Element):
            if other._parent == parent:
                return parent._eq(self._data, other._data)
            if self._defers_to(other):
                return other.__eq__(self)
            if not parent._coerces_from(other._parent):
                return False
        return parent._compare(self._data, other)

    def __hash__(self) -> int:
        return self._parent._hash(self._data)

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __str__(self) -> str:
        return self._parent._format(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._parent._debug(self._data)}, parent={self._parent.name()!r})"


def format_terms(terms: Sequence[Tuple[int, str]], var: str) -> str:
    """
    Render (exponent, coefficient text) pairs, highest exponent first, as
    "c*x^i" terms.  Zero terms must already be filtered out.
    """
    out: List[str] = []
    for exp, c in sorted(terms, key=lambda t: t[0], reverse=True):
        mono = "" if exp == 0 else (var if exp == 1 else f"{var}^{exp}")
        if not mono:
            term = c
        elif c == "1":
            term = mono
        elif c == "-1":
            term = f"-{mono}"
        else:
            term = f"{c}*{mono}"
        if not out:
            out.append(term)
        elif term.startswith("-"):
            out.append(f" - {term[1:]}")
        else:
            out.append(f" + {term}")
    return "".join(out) if out else "0"


__all__ = ["Ring", "Element", "format_terms"]
