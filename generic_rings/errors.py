"""
Error model for the generic ring framework.

Redlines:
  - Invalid input -> typed exception, never a silent default
  - Every error names the Ring/value pairing that could not be reconciled
  - Kernel invariant violations are not wrapped; they propagate as they are
"""

from __future__ import annotations

from typing import Any, Optional


class RingError(RuntimeError):
    """Base of every recoverable error raised by the framework."""

    def __init__(self, message: str, *, ring: Optional[Any] = None, value: Optional[Any] = None):
        super().__init__(message)
        self.ring = ring
        self.value = value


class ConstructionError(RingError, ValueError):
    """A ring's defining data violates a mathematical precondition."""


class ConversionError(RingError, ValueError):
    """A value cannot be coerced into the target ring or representation."""


class TypeMismatch(RingError, TypeError):
    """An element belongs to a ring that no declared conversion bridges."""


class DomainError(RingError, ValueError):
    """The source of a fallible conversion lies outside the target's image."""


def describe(value: Any) -> str:
    """Short `repr` of a value with its type, for error messages."""
    text = repr(value)
    if len(text) > 80:
        text = text[:77] + "..."
    return f"{text} ({type(value).__name__})"


__all__ = [
    "RingError",
    "ConstructionError",
    "ConversionError",
    "TypeMismatch",
    "DomainError",
    "describe",
]
