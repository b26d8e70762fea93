"""ESTree node representation used by the traversal and the indent rule."""

from __future__ import annotations

from typing import Any, Dict, Iterator, Optional, Tuple


class Node:
    """
    A single ESTree node.

    ``type`` and ``range`` are always present; every other ESTree property
    (``body``, ``params``, ``operator``...) is exposed as an attribute.
    ``parent`` is filled in by the traversal before a node's handlers run.
    """

    __slots__ = ("type", "range", "parent", "_fields")

    def __init__(self, type: str, range: Tuple[int, int], fields: Dict[str, Any]):
        self.type = type
        self.range = range
        self.parent: Optional[Node] = None
        self._fields = fields

    def __getattr__(self, name: str) -> Any:
        try:
            return self._fields[name]
        except KeyError:
            raise AttributeError(f"{self.type} node has no property {name!r}") from None

    def get(self, name: str, default: Any = None) -> Any:
        return self._fields.get(name, default)

    def children(self, key: str) -> Iterator["Node"]:
        """Yield the child nodes stored under ``key`` (skipping holes)."""
        value = self._fields.get(key)
        if isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    yield item
        elif isinstance(value, Node):
            yield value

    def __repr__(self) -> str:
        return f"Node({self.type!r}, {self.range!r})"


def is_node(value: Any, *types: str) -> bool:
    return isinstance(value, Node) and (not types or value.type in types)
