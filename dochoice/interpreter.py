"""
State program interpreter for the dochoice system.

Programs are executed with an explicit stack of generators instead of Python
recursion, so arbitrarily deep compositions (long sequences, long chains of
alternatives) run in constant Python stack depth.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any, TypeVar

from dochoice.state import (
    GeneratorState,
    PureEffect,
    StateEffect,
    StateGetEffect,
    StateModifyEffect,
    StateProgram,
    StatePutEffect,
)

T = TypeVar("T")
S = TypeVar("S")

logger = logging.getLogger(__name__)


def _handle_effect(effect: StateEffect[Any], state: Any) -> tuple[Any, Any]:
    """Apply a primitive effect, returning ``(value, new_state)``."""
    if isinstance(effect, PureEffect):
        return effect.value, state
    if isinstance(effect, StateGetEffect):
        return state, state
    if isinstance(effect, StatePutEffect):
        return None, effect.state
    if isinstance(effect, StateModifyEffect):
        return None, effect.func(state)
    raise ValueError(f"Unknown effect: {effect!r}")


def run_state(program: StateProgram[T], initial: S) -> tuple[T, S]:
    """
    Execute ``program`` against ``initial`` and return ``(value, final_state)``.

    Exceptions raised by user code inside the program propagate unchanged,
    after every generator still suspended on the stack is closed, innermost first.
    """
    if not isinstance(program, StateProgram):
        raise TypeError(f"Expected StateProgram, got {type(program).__name__}")

    stack: list[Generator[StateProgram[Any], Any, Any]] = []
    try:
        return _drive(program, initial, stack)
    except BaseException:
        while stack:
            stack.pop().close()
        raise


def _drive(
    program: StateProgram[T],
    initial: S,
    stack: list[Generator[StateProgram[Any], Any, Any]],
) -> tuple[T, S]:
    state: Any = initial
    pending: StateProgram[Any] | None = program
    value: Any = None
    steps = 0

    while True:
        if pending is not None:
            current, pending = pending, None
            steps += 1
            if isinstance(current, StateEffect):
                value, state = _handle_effect(current, state)
            elif isinstance(current, GeneratorState):
                stack.append(current.to_generator())
                value = None
            else:
                raise TypeError(
                    f"Program {current!r} is neither a primitive effect nor a generator program"
                )

        if not stack:
            logger.debug("state program finished after %d steps", steps)
            return value, state

        gen = stack[-1]
        try:
            yielded = gen.send(value)
        except StopIteration as stop:
            stack.pop()
            value = stop.value
            continue

        if not isinstance(yielded, StateProgram):
            gen.close()
            raise TypeError(
                f"Unknown yield type: {type(yielded).__name__}; "
                "generators must yield StateProgram instances"
            )
        pending = yielded


__all__ = ["run_state"]
