"""
The do decorator for the dochoice system.

This module provides the @do decorator that converts generator functions
into Alternative factories, enabling do-notation for backtracking
computations.
"""

import inspect
import types
from collections.abc import Callable, Generator
from typing import Any, Generic, ParamSpec, TypeVar

from dochoice._vendor import Err, Ok, Result
from dochoice.alternative import Alternative
from dochoice.state import GeneratorState, StateProgram

P = ParamSpec("P")
T = TypeVar("T")

AltGenerator = Generator[Alternative[Any, Any, Any], Any, T]


class DoFunction(Generic[P, T]):
    """Callable produced by :func:`do`; each call yields a fresh Alternative."""

    def __init__(self, func: Callable[P, AltGenerator[T]]) -> None:
        self.original_func = func

        for attr in ("__doc__", "__module__", "__name__", "__qualname__", "__annotations__"):
            value = getattr(func, attr, None)
            if value is not None:
                setattr(self, attr, value)
        self.__wrapped__ = func

        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            signature = None
        if signature is not None:
            self.__signature__ = signature

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __call__(self, *args: P.args, **kwargs: P.kwargs) -> Alternative[Any, Any, T]:
        func = self.original_func

        def factory() -> Generator[StateProgram[Any], Any, Result[T]]:
            gen_or_value = func(*args, **kwargs)
            if not inspect.isgenerator(gen_or_value):
                return Ok(gen_or_value)

            gen = gen_or_value
            try:
                current = next(gen)
            except StopIteration as stop_exc:
                return Ok(stop_exc.value)

            try:
                while True:
                    if not isinstance(current, Alternative):
                        raise TypeError(
                            f"@do function {getattr(self, '__name__', '<anonymous>')!r} yielded "
                            f"{type(current).__name__}; expected Alternative"
                        )
                    result = yield current.program
                    if isinstance(result, Err):
                        return result
                    try:
                        current = gen.send(result.value)
                    except StopIteration as stop_exc:
                        return Ok(stop_exc.value)
            finally:
                gen.close()

        return Alternative(GeneratorState(factory))

    def __repr__(self) -> str:
        return f"<do {getattr(self, '__qualname__', '<anonymous>')}>"


def do(func: Callable[P, AltGenerator[T]]) -> DoFunction[P, T]:
    """
    Decorator that converts a generator function into an Alternative factory.

    Each ``yield`` runs an Alternative and evaluates to its success value. The
    first failing yield ends the whole computation with that failure, exactly
    like ``bind``; the generator is closed and never resumed. The generator's
    return value is the success value.

    The generator is only created when the computation runs, so the returned
    Alternative can be run any number of times.

    Do not wrap a ``yield`` in try/except to recover from a failure: failures
    are values, not exceptions. Use alternation instead:

        @do
        def signed_number():
            sign = yield (char("-") | inject("+"))
            digits = yield many_digits()
            return int(sign + digits)

    Usage:
        @do
        def next_token():
            tokens = yield get()
            if not tokens:
                yield error("end of input")
            yield put(tokens[1:])
            return tokens[0]

        run(next_token(), ("a", "b")).value  # "a"
    """

    return DoFunction(func)


__all__ = ["AltGenerator", "DoFunction", "do"]
