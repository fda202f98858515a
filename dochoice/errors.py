from __future__ import annotations

from typing import Any

from dochoice.error_tree import ErrorTree


class DochoiceError(Exception):
    """Base class for exceptions raised at the dochoice library boundary."""


class AlternativeFailure(DochoiceError):
    """Raised when the value of a failed run (or an ``Err`` result) is requested."""

    def __init__(self, tree: ErrorTree[Any]) -> None:
        self.tree = tree
        super().__init__(
            f"Alternative failed with {tree.size()} recorded failure(s):\n"
            f"{tree.render()}"
        )


__all__ = ["AlternativeFailure", "DochoiceError"]
