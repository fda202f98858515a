"""Tests for the deferred state programs and their interpreter."""

from typing import Any, Generator

import pytest

from dochoice import Get, Modify, Pure, Put, StateProgram, run_state, state_do
from dochoice.state import GeneratorState, StateGetEffect, get_state, put_state


def test_primitive_effects():
    assert run_state(Pure(7), "s") == (7, "s")
    assert run_state(Get(), "s") == ("s", "s")
    assert run_state(Put("t"), "s") == (None, "t")
    assert run_state(Modify(str.upper), "s") == (None, "S")


def test_lowercase_aliases():
    assert isinstance(get_state(), StateGetEffect)
    assert run_state(put_state(3), 0) == (None, 3)


def test_map_and_flat_map():
    program = Get().map(lambda n: n * 2).flat_map(lambda doubled: Put(doubled).map(lambda _: doubled))

    assert run_state(program, 21) == (42, 42)
    assert run_state(StateProgram.pure("x").and_then(lambda v: Pure(v + "y")), None) == ("xy", None)


def test_flat_map_requires_program_result():
    program = Pure(1).flat_map(lambda v: v + 1)  # type: ignore[arg-type, return-value]

    with pytest.raises(TypeError, match="binder must return a StateProgram"):
        run_state(program, None)


def test_non_callable_arguments_rejected_early():
    with pytest.raises(TypeError):
        Pure(1).map(3)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Pure(1).flat_map(None)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Modify("nope")  # type: ignore[arg-type]


def test_state_do_is_lazy_and_rerunnable():
    calls = []

    @state_do
    def increment(step: int) -> Generator[StateProgram[Any], Any, int]:
        calls.append(step)
        current = yield Get()
        yield Put(current + step)
        return current

    program = increment(2)
    assert calls == []

    assert run_state(program, 40) == (40, 42)
    assert run_state(program, 0) == (0, 2)
    assert calls == [2, 2]
    assert increment.__name__ == "increment"


def test_nested_generator_programs():
    @state_do
    def inner():
        yield Modify(lambda n: n + 1)
        return "inner"

    @state_do
    def outer():
        first = yield inner()
        second = yield inner()
        total = yield Get()
        return (first, second, total)

    assert run_state(outer(), 0) == (("inner", "inner", 2), 2)


def test_unknown_yield_raises_type_error():
    def bad():
        yield 42

    with pytest.raises(TypeError, match="Unknown yield type: int"):
        run_state(GeneratorState(bad), None)


def test_run_state_rejects_non_program():
    with pytest.raises(TypeError):
        run_state("not a program", None)  # type: ignore[arg-type]


def test_exceptions_from_user_code_propagate():
    program = Get().map(lambda _: 1 / 0)

    with pytest.raises(ZeroDivisionError):
        run_state(program, None)


def test_deep_flat_map_chain_is_stack_safe():
    program: StateProgram[Any] = Pure(None)
    for _ in range(5000):
        program = program.flat_map(lambda _: Modify(lambda n: n + 1))

    assert run_state(program, 0) == (None, 5000)


def test_suspended_generators_closed_innermost_first_on_error():
    closed = []

    @state_do
    def inner():
        try:
            yield Modify(lambda _: 1 / 0)
        finally:
            closed.append("inner")

    @state_do
    def outer():
        try:
            yield inner()
        finally:
            closed.append("outer")

    with pytest.raises(ZeroDivisionError):
        try:
            run_state(outer(), 0)
        except ZeroDivisionError:
            assert closed == ["inner", "outer"]
            raise
