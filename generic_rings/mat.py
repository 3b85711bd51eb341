"""
Matrix spaces over any ring.

Raw data is an (nrows, ncols) numpy object array of base-ring Elements.  The
shape is part of the space's context and fixed: entry access outside it raises
IndexError.  Products of compatible shapes land in the matching space.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple

from . import algebra_backend as kernel
from .context import MatContext
from .conversion import conversion
from .errors import ConstructionError, ConversionError, DomainError, TypeMismatch, describe
from .ring import Element, Ring

_logger = logging.getLogger(__name__)


class Mat(Element):
    __slots__ = ()

    def base_ring(self) -> Ring:
        return self._parent.base_ring()

    def nrows(self) -> int:
        return self._parent.context.nrows

    def ncols(self) -> int:
        return self._parent.context.ncols

    def _check(self, i: Any, j: Any) -> Tuple[int, int]:
        ctx = self._parent.context
        for idx, bound in ((i, ctx.nrows), (j, ctx.ncols)):
            if isinstance(idx, bool) or not isinstance(idx, int):
                raise TypeError(f"matrix index must be int, got {type(idx).__name__}")
            if not 0 <= idx < bound:
                raise IndexError(f"index ({i}, {j}) outside a {ctx.nrows}x{ctx.ncols} matrix")
        return i, j

    def get_entry(self, i: int, j: int) -> Element:
        i, j = self._check(i, j)
        return self._data[i, j].copy()

    def set_entry(self, i: int, j: int, value: Any) -> None:
        i, j = self._check(i, j)
        base = self._parent.base_ring()
        try:
            c = base.new(value)
        except ConversionError as e:
            if isinstance(value, Element):
                raise TypeMismatch(
                    f"entry {describe(value)} does not belong to {base.name()}", ring=base, value=value
                ) from e
            raise
        self._data[i, j] = c

    def get_coeff(self, index: Tuple[int, int]) -> Element:
        i, j = index
        return self.get_entry(i, j)

    def set_coeff(self, index: Tuple[int, int], value: Any) -> None:
        i, j = index
        self.set_entry(i, j, value)

    def __getitem__(self, index: Tuple[int, int]) -> Element:
        return self.get_coeff(index)

    def __setitem__(self, index: Tuple[int, int], value: Any) -> None:
        self.set_coeff(index, value)

    def rows(self) -> List[List[Element]]:
        return [[x.copy() for x in row] for row in self._data]

    def transpose(self) -> "Mat":
        ctx = self._parent.context
        space = MatSpace(ctx.base_ring, ctx.ncols, ctx.nrows)
        flat = [self._data[i, j].copy() for j in range(ctx.ncols) for i in range(ctx.nrows)]
        return space._wrap(kernel.object_matrix(flat, ctx.ncols, ctx.nrows))

    # -- products ------------------------------------------------------------

    def _scalar(self, other: Any) -> Optional[Element]:
        """`other` as a base-ring scalar, or None for an element that is not one."""
        base = self._parent.base_ring()
        if isinstance(other, Element):
            if other._parent != base and not base._coerces_from(other._parent):
                return None
            return base.new(other)
        try:
            return base.new(other)
        except ConversionError as e:
            raise self._mismatch(other) from e

    def _mismatch(self, other: Any) -> TypeMismatch:
        return TypeMismatch(
            f"cannot combine {describe(other)} with an element of {self._parent.name()}",
            ring=self._parent,
            value=other,
        )

    def _scaled(self, s: Element, left: bool) -> "Mat":
        ctx = self._parent.context
        flat = [s * x if left else x * s for x in self._data.flat]
        return self._parent._wrap(kernel.object_matrix(flat, ctx.nrows, ctx.ncols))

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Mat) and other.base_ring() == self.base_ring():
            return self._parent._matmul(self, other)
        if self._defers_to(other):
            return other.__rmul__(self)
        s = self._scalar(other)
        if s is not None:
            return self._scaled(s, left=False)
        if isinstance(other, Mat):
            return _promoted_product(self, other)
        raise self._mismatch(other)

    def __rmul__(self, other: Any) -> Any:
        s = self._scalar(other)
        if s is not None:
            return self._scaled(s, left=True)
        if isinstance(other, Mat):
            return _promoted_product(other, self)
        raise self._mismatch(other)


def _promoted_product(a: Mat, b: Mat) -> Mat:
    """a * b after moving both into the base ring that embeds the other."""
    ra, rb = a.base_ring(), b.base_ring()
    if rb._coerces_from(ra):
        a = MatSpace(rb, a.nrows(), a.ncols()).new(a)
    elif ra._coerces_from(rb):
        b = MatSpace(ra, b.nrows(), b.ncols()).new(b)
    else:
        raise TypeMismatch(f"cannot multiply matrices over {ra.name()} and {rb.name()}", ring=a.parent(), value=b)
    _logger.debug("matrix product promoted to %s", a.base_ring())
    return a.parent()._matmul(a, b)


class MatSpace(Ring):
    element_class = Mat

    def __init__(self, base_ring: Ring, nrows: int, ncols: int):
        if not isinstance(base_ring, Ring):
            raise ConstructionError(f"matrix base must be a Ring, got {type(base_ring).__name__}", value=base_ring)
        super().__init__(MatContext(base_ring, nrows, ncols))

    @property
    def depth(self) -> int:
        return self._context.base_ring.depth + 1

    def base_ring(self) -> Ring:
        return self._context.base_ring

    def nrows(self) -> int:
        return self._context.nrows

    def ncols(self) -> int:
        return self._context.ncols

    def is_square(self) -> bool:
        return self._context.nrows == self._context.ncols

    def identity(self) -> Mat:
        return self.one()

    def name(self) -> str:
        ctx = self._context
        return f"Space of {ctx.nrows}x{ctx.ncols} matrices over {ctx.base_ring._nested_name()}"

    def __repr__(self) -> str:
        ctx = self._context
        return f"MatSpace({ctx.base_ring!r}, {ctx.nrows}, {ctx.ncols})"

    def characteristic(self) -> int:
        return self._context.base_ring.characteristic()

    def _matmul(self, a: Mat, b: Mat) -> Mat:
        ctx, other = self._context, b._parent.context
        if other.base_ring != ctx.base_ring:
            raise TypeMismatch(
                f"cannot multiply matrices over {ctx.base_ring.name()} and {other.base_ring.name()}",
                ring=self,
                value=b,
            )
        if ctx.ncols != other.nrows:
            raise TypeMismatch(
                f"cannot multiply {ctx.nrows}x{ctx.ncols} by {other.nrows}x{other.ncols}", ring=self, value=b
            )
        space = self if other.ncols == ctx.ncols else MatSpace(ctx.base_ring, ctx.nrows, other.ncols)
        zero = ctx.base_ring.zero()
        flat = []
        for i in range(ctx.nrows):
            for j in range(other.ncols):
                acc = zero
                for k in range(ctx.ncols):
                    acc = acc + a._data[i, k] * b._data[k, j]
                flat.append(acc)
        return space._wrap(kernel.object_matrix(flat, ctx.nrows, other.ncols))

    def _entries(self, source: Any) -> List[Any]:
        """Row-major sources from a flat sequence or a sequence of rows."""
        r, c = self._context.nrows, self._context.ncols
        items = list(source)
        if len(items) == r and all(isinstance(row, (list, tuple)) and len(row) == c for row in items):
            return [x for row in items for x in row]
        if len(items) == r * c:
            return items
        raise self._reject(source, f"expected {r * c} entries or {r} rows of {c}")

    def _coerce(self, source: Any):
        ctx = self._context
        base = ctx.base_ring
        if isinstance(source, Mat) and not self._is_scalar_source(source):
            other = source._parent.context
            if (other.nrows, other.ncols) != (ctx.nrows, ctx.ncols):
                raise self._reject(source, "shape differs")
            entries: Sequence[Any] = list(source._data.flat)
        elif isinstance(source, (list, tuple)):
            entries = self._entries(source)
        else:
            # a scalar is the scalar matrix, defined for square spaces only
            if not self.is_square():
                raise self._reject(source, "scalars only embed in square spaces")
            try:
                s = base.new(source)
            except ConversionError as e:
                raise self._reject(source, str(e)) from e
            return self._diagonal(s)
        out = []
        for idx, item in enumerate(entries):
            try:
                out.append(base.new(item))
            except ConversionError as e:
                raise self._reject(source, f"entry {divmod(idx, ctx.ncols)}: {e}") from e
        return kernel.object_matrix(out, ctx.nrows, ctx.ncols)

    def _is_scalar_source(self, source: Element) -> bool:
        # elements of the base ring are scalars even when they are matrices themselves
        base = self._context.base_ring
        return source._parent == base or base._coerces_from(source._parent)

    def _coerces_from(self, other: Ring) -> bool:
        ctx = self._context
        base = ctx.base_ring
        if other == self:
            return True
        if isinstance(other, MatSpace) and (other.nrows(), other.ncols()) == (ctx.nrows, ctx.ncols):
            if base._coerces_from(other.base_ring()):
                return True
        # scalars
        return self.is_square() and other.depth < self.depth and base._coerces_from(other)

    def _scalar_entry(self, a) -> Optional[Element]:
        """s when the matrix is s times the identity, else None."""
        ctx = self._context
        if not self.is_square() or ctx.nrows == 0:
            return None
        s = a[0, 0]
        for i in range(ctx.nrows):
            for j in range(ctx.ncols):
                x = a[i, j]
                if not (x == s if i == j else x.is_zero()):
                    return None
        return s

    def _compare(self, a, value: Any) -> bool:
        if isinstance(value, (list, tuple)) or (isinstance(value, Mat) and not self._is_scalar_source(value)):
            return super()._compare(a, value)
        s = self._scalar_entry(a)
        return s is not None and s == value

    def _diagonal(self, s: Element):
        n = self._context.nrows
        base = self._context.base_ring
        flat = [s.copy() if i == j else base.zero() for i in range(n) for j in range(n)]
        return kernel.object_matrix(flat, n, n)

    def _zero_data(self):
        ctx = self._context
        base = ctx.base_ring
        return kernel.object_matrix([base.zero() for _ in range(ctx.nrows * ctx.ncols)], ctx.nrows, ctx.ncols)

    def _one_data(self):
        if not self.is_square():
            raise DomainError(f"{self.name()} has no identity", ring=self)
        return self._diagonal(self._context.base_ring.one())

    def _entrywise(self, fn, *arrays):
        ctx = self._context
        flat = [fn(*xs) for xs in zip(*(a.flat for a in arrays))]
        return kernel.object_matrix(flat, ctx.nrows, ctx.ncols)

    def _add(self, a, b):
        return self._entrywise(lambda x, y: x + y, a, b)

    def _sub(self, a, b):
        return self._entrywise(lambda x, y: x - y, a, b)

    def _neg(self, a):
        return self._entrywise(lambda x: -x, a)

    def _mul(self, a, b):
        # square spaces only; Mat.__mul__ routes every other shape through _matmul
        return self._matmul(self._wrap(a), self._wrap(b))._data

    def _is_zero(self, a) -> bool:
        return all(x.is_zero() for x in a.flat)

    def _eq(self, a, b) -> bool:
        return all(x == y for x, y in zip(a.flat, b.flat))

    def _hash(self, a) -> int:
        s = self._scalar_entry(a)
        if s is not None:
            # scalar matrices hash like the scalar they equal
            return hash(s)
        return hash((self._context.nrows, self._context.ncols, tuple(a.flat)))

    def _copy(self, a):
        return self._entrywise(lambda x: x.copy(), a)

    def _format(self, a) -> str:
        if self._context.nrows == 0:
            return "[]"
        return "\n".join("[" + ", ".join(str(x) for x in row) + "]" for row in a)

    def _debug(self, a) -> str:
        base = self._context.base_ring
        rows = ("[" + ", ".join(base._debug(x._data) for x in row) + "]" for row in a)
        return "[" + ", ".join(rows) + "]"


@conversion(Mat, str)
def _mat_to_str(x: Mat) -> str:
    return str(x)
