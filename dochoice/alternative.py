"""
The Alternative computation type.

An ``Alternative[U, E, A]`` is a deferred state program whose state is the pair
``(user_state, aborted)`` and whose value is ``Result[A]`` with an
``ErrorTree[E]`` on failure. The ``aborted`` flag belongs to this layer;
:func:`dochoice.control.get` and friends only ever see ``user_state``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from dochoice._vendor import Result
from dochoice.state import StateProgram

if TYPE_CHECKING:
    from dochoice.run import RunResult

U = TypeVar("U")
E = TypeVar("E")
A = TypeVar("A")
B = TypeVar("B")

@dataclass(frozen=True, eq=False)
class Alternative(Generic[U, E, A]):
    """
    A backtracking computation over a caller-owned state.

    Building an Alternative performs no work. Composition is available both as
    named functions in :mod:`dochoice.combinators` and as methods/operators:

    - ``a | b`` tries ``a`` then, on a non-aborted failure, ``b`` from the
      state ``a`` started with (``alt_or``).
    - ``a ** b`` is the same choice grouped to the right, so
      ``a ** b ** c == a ** (b ** c)`` (``alt_or_right_assoc``).
    - ``f @ a`` applies ``f`` to the success value of ``a`` (``fmap``).
    """

    program: StateProgram[Result[A]]

    def __post_init__(self) -> None:
        if not isinstance(self.program, StateProgram):
            raise TypeError(
                f"Alternative wraps a StateProgram; got {type(self.program).__name__}"
            )

    def map(self, f: Callable[[A], B]) -> Alternative[U, E, B]:
        from dochoice.combinators import fmap

        return fmap(f, self)

    def flat_map(self, f: Callable[[A], Alternative[U, E, B]]) -> Alternative[U, E, B]:
        """Monadic bind: run ``f`` on the success value, stop on failure."""
        from dochoice.combinators import bind

        return bind(self, f)

    def and_then(self, f: Callable[[A], Alternative[U, E, B]]) -> Alternative[U, E, B]:
        return self.flat_map(f)

    def apply(self, arg: Alternative[U, E, Any]) -> Alternative[U, E, Any]:
        """Apply the function this computation produces to the value of ``arg``."""
        from dochoice.combinators import apply

        return apply(self, arg)

    def or_else(self, other: Alternative[U, E, A]) -> Alternative[U, E, A]:
        from dochoice.combinators import alt_or

        return alt_or(self, other)

    def run(self, user_state: U) -> RunResult[U, A]:
        """Run from ``(user_state, False)``."""
        from dochoice.run import run

        return run(self, user_state)

    @staticmethod
    def pure(value: A) -> Alternative[Any, Any, A]:
        from dochoice.combinators import inject

        return inject(value)

    def __or__(self, other: Alternative[U, E, A]) -> Alternative[U, E, A]:
        if not isinstance(other, Alternative):
            return NotImplemented
        from dochoice.combinators import alt_or

        return alt_or(self, other)

    def __pow__(self, other: Alternative[U, E, A]) -> Alternative[U, E, A]:
        if not isinstance(other, Alternative):
            return NotImplemented
        from dochoice.combinators import alt_or_right_assoc

        return alt_or_right_assoc(self, other)

    def __rmatmul__(self, f: Callable[[A], B]) -> Alternative[U, E, B]:
        if not callable(f):
            return NotImplemented
        from dochoice.combinators import fmap

        return fmap(f, self)


__all__ = ["Alternative"]
