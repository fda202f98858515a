"""
Entry points for executing Alternatives.

Example:
    >>> from dochoice import abort, inject, modify, run
    >>> attempt = modify(lambda n: n + 1).flat_map(lambda _: abort("boom"))
    >>> result = run(attempt | inject("ok"), 0)
    >>> result.state, result.aborted
    (1, True)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from loguru import logger

from dochoice._vendor import Err, Ok, Result
from dochoice.alternative import Alternative
from dochoice.error_tree import ErrorTree
from dochoice.errors import AlternativeFailure
from dochoice.interpreter import run_state
from dochoice.utils import DEBUG_ALTERNATIVE, short_repr

U = TypeVar("U")
A = TypeVar("A")


@dataclass(frozen=True)
class RunResult(Generic[U, A]):
    """Outcome of running an Alternative: its result and the final state pair."""

    result: Result[A]
    state: U
    aborted: bool

    @property
    def value(self) -> A:
        """Get the successful value or raise :class:`AlternativeFailure`."""
        if isinstance(self.result, Ok):
            return self.result.value
        raise AlternativeFailure(self.result.error)

    @property
    def error_tree(self) -> ErrorTree[Any] | None:
        if isinstance(self.result, Err):
            return self.result.error
        return None

    @property
    def final_state(self) -> tuple[U, bool]:
        return self.state, self.aborted

    def is_ok(self) -> bool:
        """Return True when the result is successful."""
        return isinstance(self.result, Ok)

    def is_err(self) -> bool:
        """Return True when the result represents a failure."""
        return isinstance(self.result, Err)

    def display(self, indent: str = "  ") -> str:
        """Human-readable multi-line report of this run."""

        lines = ["=" * 60, "Alternative RunResult", "=" * 60]
        if isinstance(self.result, Ok):
            lines.append("Status: ok")
            lines.append(f"Value: {self.result.value!r}")
        else:
            tree = self.result.error
            lines.append("Status: error")
            lines.append(f"Failures recorded: {tree.size()}")
            lines.append("Error tree:")
            lines.extend(f"{indent}{line}" for line in tree.render(indent).splitlines())
        lines.append(f"State: {self.state!r}")
        lines.append(f"Aborted: {self.aborted}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.display()


def run_alternative(
    alternative: Alternative[U, Any, A],
    initial: tuple[U, bool],
) -> tuple[Result[A], tuple[U, bool]]:
    """
    Run ``alternative`` from the ``(user_state, aborted)`` pair ``initial``.

    Returns ``(result, (user_state, aborted))``.
    """

    if not isinstance(alternative, Alternative):
        raise TypeError(f"Expected Alternative, got {type(alternative).__name__}")
    user_state, aborted = initial
    result, (final_state, final_aborted) = run_state(
        alternative.program, (user_state, bool(aborted))
    )
    if not isinstance(result, Result):
        raise TypeError(
            f"Alternative program produced {type(result).__name__}; expected Result"
        )
    return result, (final_state, final_aborted)


def run(alternative: Alternative[U, Any, A], user_state: U) -> RunResult[U, A]:
    """Run ``alternative`` from a fresh, backtrackable ``(user_state, False)``."""

    result, (final_state, aborted) = run_alternative(alternative, (user_state, False))
    if DEBUG_ALTERNATIVE:
        logger.debug(
            "alternative run finished: result={} state={} aborted={}",
            short_repr(result),
            short_repr(final_state),
            aborted,
        )
    return RunResult(result=result, state=final_state, aborted=aborted)


__all__ = ["RunResult", "run", "run_alternative"]
