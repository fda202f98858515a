"""
Monad operations and the backtracking choice operator for Alternatives.

Sequencing (``bind``, ``fmap``, ``apply``, ``sequence``) always stops at the
first failure and keeps only that error. Only alternation (``alt_or`` and the
chaining helpers built on it) merges errors, by appending the right side's
tree as the last child of the left side's tree.
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterable
from functools import reduce
from typing import Any, TypeVar

from loguru import logger

from dochoice._vendor import Err, Ok, Result
from dochoice.alternative import Alternative
from dochoice.state import GeneratorState, Get, Pure, Put, StateProgram
from dochoice.utils import DEBUG_ALTERNATIVE, short_repr

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")


def _ensure_alternative(value: Any, role: str) -> Alternative[Any, Any, Any]:
    if not isinstance(value, Alternative):
        raise TypeError(f"{role} must be an Alternative; got {type(value).__name__}")
    return value


def inject(value: A) -> Alternative[Any, Any, A]:
    """Succeed with ``value``, leaving the state unchanged."""

    return Alternative(Pure(Ok(value)))


def lift_result(result: Result[A]) -> Alternative[Any, Any, A]:
    """Produce exactly ``result``, success or failure, leaving the state unchanged."""

    if not isinstance(result, Result):
        raise TypeError(f"lift_result expects a Result; got {type(result).__name__}")
    return Alternative(Pure(result))


def bind(
    computation: Alternative[U, Any, A],
    f: Callable[[A], Alternative[U, Any, B]],
) -> Alternative[U, Any, B]:
    """
    Run ``computation``; on success run ``f(value)`` against the resulting state.

    A failure is returned untouched and ``f`` is never called. The abort flag
    plays no part here: sequencing stops on any failure.
    """

    _ensure_alternative(computation, "bind source")
    if not callable(f):
        raise TypeError("binder must be callable returning an Alternative")

    def factory() -> Generator[StateProgram[Any], Any, Result[B]]:
        result = yield computation.program
        if isinstance(result, Err):
            return result
        next_alt = _ensure_alternative(f(result.value), "binder result")
        return (yield next_alt.program)

    return Alternative(GeneratorState(factory))


def fmap(f: Callable[[A], B], computation: Alternative[U, Any, A]) -> Alternative[U, Any, B]:
    """Function application lifted into Alternative."""

    if not callable(f):
        raise TypeError("mapper must be callable")
    return bind(computation, lambda value: inject(f(value)))


def apply(
    f: Alternative[U, Any, Callable[[A], B]],
    computation: Alternative[U, Any, A],
) -> Alternative[U, Any, B]:
    """Sequential application: run ``f``, then ``computation``, then call."""

    _ensure_alternative(computation, "apply argument")
    return bind(f, lambda func: fmap(func, computation))


def sequence(computations: Iterable[Alternative[U, Any, A]]) -> Alternative[U, Any, list[A]]:
    """
    Run ``computations`` in order and collect their values.

    Stops at the first failure and returns that error alone; the state then
    reflects execution up to and including the failing element.
    """

    items = [_ensure_alternative(c, "sequence element") for c in computations]

    def factory() -> Generator[StateProgram[Any], Any, Result[list[A]]]:
        values: list[A] = []
        for item in items:
            result = yield item.program
            if isinstance(result, Err):
                return result
            values.append(result.value)
        return Ok(values)

    return Alternative(GeneratorState(factory))


def traverse(
    items: Iterable[T],
    f: Callable[[T], Alternative[U, Any, A]],
) -> Alternative[U, Any, list[A]]:
    """``sequence`` over ``f`` applied to each item; ``f`` is called on each run."""

    if not callable(f):
        raise TypeError("traverse expects a callable")
    values_in = list(items)

    def factory() -> Generator[StateProgram[Any], Any, Result[list[A]]]:
        values: list[A] = []
        for item in values_in:
            step = _ensure_alternative(f(item), "traverse result")
            result = yield step.program
            if isinstance(result, Err):
                return result
            values.append(result.value)
        return Ok(values)

    return Alternative(GeneratorState(factory))


def alt_or(
    first: Alternative[U, Any, A],
    second: Alternative[U, Any, A],
) -> Alternative[U, Any, A]:
    """
    Try ``first``; fall back to ``second`` with backtracking.

    - ``first`` succeeds: its value and state win and ``second`` never runs.
    - ``first`` fails after an abort: its error propagates, nothing rolls back.
    - otherwise the state is restored to what ``first`` started from and
      ``second`` runs. If it fails too, the result is ``first``'s tree with
      ``second``'s tree appended as its last child.
    """

    _ensure_alternative(first, "left alternative")
    _ensure_alternative(second, "right alternative")

    def factory() -> Generator[StateProgram[Any], Any, Result[A]]:
        snapshot = yield Get()
        left = yield first.program
        if isinstance(left, Ok):
            return left

        _, aborted = yield Get()
        if aborted:
            if DEBUG_ALTERNATIVE:
                logger.debug("abort set, skipping right alternative: {}", short_repr(left.error))
            return left

        if DEBUG_ALTERNATIVE:
            logger.debug("backtracking after {}", short_repr(left.error))
        yield Put(snapshot)
        right = yield second.program
        if isinstance(right, Ok):
            return right
        return Err(left.error.with_child(right.error))

    return Alternative(GeneratorState(factory))


def alt_or_right_assoc(*alternatives: Alternative[U, Any, A]) -> Alternative[U, Any, A]:
    """
    Chain alternatives grouped to the right: ``a | (b | (c | ...))``.

    The leftmost success wins. When all fail, each alternative's tree becomes
    the last child of the tree of the alternative tried just before it.
    """

    if not alternatives:
        raise ValueError("alt_or_right_assoc requires at least one alternative")
    items = [_ensure_alternative(a, "alternative") for a in alternatives]
    return reduce(lambda acc, alt: alt_or(alt, acc), reversed(items[:-1]), items[-1])


def choice(*alternatives: Alternative[U, Any, A]) -> Alternative[U, Any, A]:
    """
    Chain alternatives grouped to the left: ``((a | b) | c) | ...``.

    The leftmost success wins. When all fail, the trees of every later
    alternative become successive children of the first one's tree.
    """

    if not alternatives:
        raise ValueError("choice requires at least one alternative")
    items = [_ensure_alternative(a, "alternative") for a in alternatives]
    return reduce(alt_or, items)


__all__ = [
    "alt_or",
    "alt_or_right_assoc",
    "apply",
    "bind",
    "choice",
    "fmap",
    "inject",
    "lift_result",
    "sequence",
    "traverse",
]
