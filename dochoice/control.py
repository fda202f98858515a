"""
Failure constructors and user-state accessors.

``error`` marks an alternative that simply does not apply; alternation may
backtrack over it. ``abort`` additionally sets the run's abort flag, after
which no enclosing alternation tries another branch. ``catch`` is the one
place where Python exceptions are turned into ordinary errors.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any, TypeVar

from dochoice._vendor import Err, Ok, Result
from dochoice.alternative import Alternative
from dochoice.error_tree import leaf
from dochoice.state import GeneratorState, Get, Modify, Pure, StateProgram

U = TypeVar("U")
E = TypeVar("E")
A = TypeVar("A")


def error(e: E) -> Alternative[Any, E, Any]:
    """Fail with a fresh leaf; the failure stays backtrackable."""

    return Alternative(Pure(e).map(lambda value: Err(leaf(value))))


def abort(e: E) -> Alternative[Any, E, Any]:
    """Set the abort flag, then fail with a fresh leaf."""

    def factory() -> Generator[StateProgram[Any], Any, Result[Any]]:
        yield Modify(lambda pair: (pair[0], True))
        return Err(leaf(e))

    return Alternative(GeneratorState(factory))


def _exception_message(exc: BaseException) -> str:
    message = str(exc)
    return message if message else type(exc).__name__


def catch(
    thunk: Callable[[], A],
    exceptions: type[BaseException] | tuple[type[BaseException], ...] = (Exception,),
) -> Alternative[Any, str, A]:
    """
    Evaluate ``thunk()`` when the computation runs.

    If it raises one of ``exceptions`` the computation fails with a leaf whose
    value is the exception message (the class name when the message is empty);
    the exception object itself is dropped. Other exceptions propagate.
    """

    if not callable(thunk):
        raise TypeError("catch expects a zero-argument callable")

    def evaluate(_pair: Any) -> Result[A]:
        try:
            return Ok(thunk())
        except exceptions as exc:
            return Err(leaf(_exception_message(exc)))

    return Alternative(Get().map(evaluate))


def get() -> Alternative[U, Any, U]:
    """Read the user state."""

    return Alternative(Get().map(lambda pair: Ok(pair[0])))


def modify(f: Callable[[U], U]) -> Alternative[U, Any, None]:
    """Replace the user state with ``f(user_state)``."""

    if not callable(f):
        raise TypeError("modify expects a callable")
    return Alternative(Modify(lambda pair: (f(pair[0]), pair[1])).map(lambda _: Ok(None)))


def put(user_state: U) -> Alternative[U, Any, None]:
    """Replace the user state."""

    return modify(lambda _: user_state)


__all__ = [
    "abort",
    "catch",
    "error",
    "get",
    "modify",
    "put",
]
