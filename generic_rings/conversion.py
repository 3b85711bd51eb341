"""
Directed conversion graph between representations.

Each edge A -> B is declared once.  Chains compose: with IntMod -> Integer and
Integer -> str declared, IntMod -> str is found by search, not by a third
declaration.  An edge is either total (defined on its whole domain) or
fallible (raises DomainError outside the image of the target); a composed
path is fallible if any of its steps is.

Nodes are Python classes: element classes (Integer, IntMod, ...) and host
types (int, str, Fraction).  Targets that need a ring context (IntMod, Poly)
are reached through `Ring.new`, not through this graph.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import ConversionError, describe

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conversion:
    source: type
    target: type
    func: Callable[[Any], Any]
    fallible: bool = False

    def __call__(self, value: Any) -> Any:
        return self.func(value)


@dataclass(frozen=True)
class ConversionPath:
    steps: Tuple[Conversion, ...]

    @property
    def fallible(self) -> bool:
        return any(s.fallible for s in self.steps)

    @property
    def nodes(self) -> Tuple[type, ...]:
        if not self.steps:
            return ()
        return (self.steps[0].source,) + tuple(s.target for s in self.steps)

    def __call__(self, value: Any) -> Any:
        for step in self.steps:
            value = step(value)
        return value

    def __str__(self) -> str:
        return " -> ".join(t.__name__ for t in self.nodes)


class ConversionGraph:
    def __init__(self) -> None:
        self._edges: Dict[type, Dict[type, Conversion]] = {}
        self._paths: Dict[Tuple[type, type], Optional[ConversionPath]] = {}

    def register(self, source: type, target: type, func: Callable[[Any], Any], *, fallible: bool = False) -> Conversion:
        if source is target:
            raise ValueError(f"conversion {source.__name__} -> {target.__name__} is the identity")
        edge = Conversion(source, target, func, fallible)
        self._edges.setdefault(source, {})[target] = edge
        self._paths.clear()
        return edge

    def declare(self, source: type, target: type, *, fallible: bool = False):
        """Decorator form of `register`."""

        def deco(func: Callable[[Any], Any]) -> Callable[[Any], Any]:
            self.register(source, target, func, fallible=fallible)
            return func

        return deco

    def edges(self) -> List[Conversion]:
        return [e for targets in self._edges.values() for e in targets.values()]

    def _source_node(self, cls: type) -> Optional[type]:
        """Most specific declared source in the MRO of `cls`."""
        for klass in cls.__mro__:
            if klass in self._edges:
                return klass
        return None

    def path(self, source: type, target: type) -> ConversionPath:
        """Shortest declared path; ties break by declaration order."""
        key = (source, target)
        if key not in self._paths:
            self._paths[key] = self._search(source, target)
        found = self._paths[key]
        if found is None:
            raise ConversionError(f"no conversion path from {source.__name__} to {target.__name__}", value=source)
        return found

    def _search(self, source: type, target: type) -> Optional[ConversionPath]:
        if source is target:
            return ConversionPath(())
        start = self._source_node(source)
        if start is None:
            return None
        parents: Dict[type, Optional[Conversion]] = {start: None}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            if node is target:
                break
            for nxt, edge in self._edges.get(node, {}).items():
                if nxt not in parents:
                    parents[nxt] = edge
                    queue.append(nxt)
        if target not in parents:
            return None
        steps = []
        node = target
        while parents[node] is not None:
            edge = parents[node]
            steps.append(edge)
            node = edge.source
        found = ConversionPath(tuple(reversed(steps)))
        _logger.debug("conversion path %s -> %s: %s", source.__name__, target.__name__, found)
        return found

    def can_convert(self, source: type, target: type) -> bool:
        try:
            self.path(source, target)
        except ConversionError:
            return False
        return True

    def convert(self, value: Any, target: type) -> Any:
        """
        Run `value` along the shortest path to `target`.

        Fallible steps raise DomainError; a missing path raises ConversionError.
        """
        if type(value) is target:
            return value
        try:
            found = self.path(type(value), target)
        except ConversionError as e:
            raise ConversionError(
                f"no conversion from {describe(value)} to {target.__name__}", value=value
            ) from e
        return found(value)


GRAPH = ConversionGraph()
conversion = GRAPH.declare


def convert(value: Any, target: type) -> Any:
    return GRAPH.convert(value, target)


__all__ = [
    "Conversion",
    "ConversionPath",
    "ConversionGraph",
    "GRAPH",
    "conversion",
    "convert",
]
