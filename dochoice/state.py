"""
Deferred state computations.

A :class:`StateProgram` describes a computation over a state value of any
type. It does nothing when built; :func:`dochoice.interpreter.run_state`
executes it against an initial state. Programs are either primitive effects
(``Pure``, ``Get``, ``Put``, ``Modify``) or a :class:`GeneratorState`, whose
generator yields sub-programs and is sent back their values.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Callable, Generator
from dataclasses import dataclass
from functools import wraps
from typing import Any, Generic, ParamSpec, TypeVar

P = ParamSpec("P")
T = TypeVar("T")
U = TypeVar("U")


class StateProgram(ABC, Generic[T]):
    """Runtime base class for all deferred state computations."""

    def map(self, f: Callable[[T], U]) -> StateProgram[U]:
        """Map a function over this program's result."""

        if not callable(f):
            raise TypeError("mapper must be callable")

        def factory() -> Generator[StateProgram[Any], Any, U]:
            value = yield self
            return f(value)

        return GeneratorState(factory)

    def flat_map(self, f: Callable[[T], StateProgram[U]]) -> StateProgram[U]:
        """Monadic bind operation."""

        if not callable(f):
            raise TypeError("binder must be callable returning a StateProgram")

        def factory() -> Generator[StateProgram[Any], Any, U]:
            value = yield self
            next_prog = f(value)
            if not isinstance(next_prog, StateProgram):
                raise TypeError(
                    "binder must return a StateProgram; got "
                    f"{type(next_prog).__name__}"
                )
            result = yield next_prog
            return result

        return GeneratorState(factory)

    def and_then(self, f: Callable[[T], StateProgram[U]]) -> StateProgram[U]:
        """Alias for flat_map."""

        return self.flat_map(f)

    @staticmethod
    def pure(value: T) -> StateProgram[T]:
        return PureEffect(value=value)


class StateEffect(StateProgram[T]):
    """Primitive step handled directly by the interpreter."""


@dataclass(frozen=True)
class PureEffect(StateEffect[T]):
    """Produces ``value`` without reading or changing the state."""

    value: T


@dataclass(frozen=True)
class StateGetEffect(StateEffect[Any]):
    """Produces the current state."""


@dataclass(frozen=True)
class StatePutEffect(StateEffect[None]):
    """Replaces the current state."""

    state: Any


@dataclass(frozen=True)
class StateModifyEffect(StateEffect[None]):
    """Replaces the current state with ``func(state)``."""

    func: Callable[[Any], Any]


@dataclass
class GeneratorState(StateProgram[T]):
    """Program backed by a generator factory.

    ``factory`` is called once per execution, so the same program can be run
    any number of times.
    """

    factory: Callable[[], Generator[StateProgram[Any], Any, T]]

    def to_generator(self) -> Generator[StateProgram[Any], Any, T]:
        return self.factory()


def Pure(value: T) -> StateProgram[T]:  # noqa: N802
    """Wrap a plain value."""
    return PureEffect(value=value)


def Get() -> StateProgram[Any]:  # noqa: N802
    """State: read the whole state."""
    return StateGetEffect()


def Put(state: Any) -> StateProgram[None]:  # noqa: N802
    """State: replace the whole state."""
    return StatePutEffect(state=state)


def Modify(func: Callable[[Any], Any]) -> StateProgram[None]:  # noqa: N802
    """State: transform the whole state."""
    if not callable(func):
        raise TypeError("Modify expects a callable")
    return StateModifyEffect(func=func)


# Lowercase aliases
get_state = Get
put_state = Put


def state_do(
    func: Callable[P, Generator[StateProgram[Any], Any, T]],
) -> Callable[P, StateProgram[T]]:
    """
    Decorator that turns a generator function into a StateProgram factory.

    The generator is not created until the returned program is executed:

        @state_do
        def increment(step: int):
            current = yield Get()
            yield Put(current + step)
            return current

        run_state(increment(2), 40)  # (40, 42)
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> StateProgram[T]:
        return GeneratorState(lambda: func(*args, **kwargs))

    return wrapper


__all__ = [
    "GeneratorState",
    "Get",
    "Modify",
    "Put",
    "Pure",
    "PureEffect",
    "StateEffect",
    "StateGetEffect",
    "StateModifyEffect",
    "StateProgram",
    "StatePutEffect",
    "get_state",
    "put_state",
    "state_do",
]
