"""
Hierarchical failure records produced by alternation.

A leaf is a single failed alternative. When the alternatives tried after a
failure also fail, their trees are appended, in trial order, as children of
the first failure's tree.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Generic, TypeVar

E = TypeVar("E")


@dataclass(frozen=True)
class ErrorTree(Generic[E]):
    """Immutable node recording a failure and the failures tried after it."""

    value: E
    children: tuple[ErrorTree[E], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))

    @classmethod
    def leaf(cls, value: E) -> ErrorTree[E]:
        return cls(value=value)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def with_child(self, child: ErrorTree[E]) -> ErrorTree[E]:
        """Return a copy of this tree with ``child`` appended as the last child."""

        if not isinstance(child, ErrorTree):
            raise TypeError(f"Expected ErrorTree child, got {type(child).__name__}")
        return ErrorTree(self.value, self.children + (child,))

    def walk(self) -> Iterator[tuple[int, ErrorTree[E]]]:
        """Yield ``(depth, node)`` pairs in pre-order."""

        stack: list[tuple[int, ErrorTree[E]]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            for child in reversed(node.children):
                stack.append((depth + 1, child))

    def values(self) -> list[E]:
        """Node values in pre-order, which is the order alternatives were tried."""

        return [node.value for _, node in self.walk()]

    def size(self) -> int:
        return sum(1 for _ in self.walk())

    def depth(self) -> int:
        return max(depth for depth, _ in self.walk())

    def render(self, indent: str = "  ") -> str:
        """Render the tree as an indented, multi-line audit trail."""

        lines = []
        for depth, node in self.walk():
            marker = "-" if node.is_leaf else "+"
            lines.append(f"{indent * depth}{marker} {node.value!r}")
        return "\n".join(lines)

    def __str__(self) -> str:
        inner = ", ".join(str(child) for child in self.children)
        return f"{{ {self.value!r}: [{inner}] }}"


def leaf(value: E) -> ErrorTree[E]:
    """Create a fresh single-failure tree."""

    return ErrorTree.leaf(value)


__all__ = ["ErrorTree", "leaf"]
