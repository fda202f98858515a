"""
Test the monad operations (inject, bind, fmap, apply, sequence) on Alternative.
"""

import pytest

from dochoice import (
    Alternative,
    Err,
    Ok,
    abort,
    apply,
    bind,
    error,
    fmap,
    get,
    inject,
    leaf,
    lift_result,
    modify,
    put,
    run,
    run_alternative,
    sequence,
    traverse,
)


def step(n):
    """Add ``n`` to the counter and return the new value."""
    return modify(lambda c: c + n).flat_map(lambda _: get())


def test_inject_leaves_state_untouched():
    assert run_alternative(inject("v"), ("u", False)) == (Ok("v"), ("u", False))
    assert run(Alternative.pure(3), None).value == 3


def test_lift_result_passes_result_through():
    tree = leaf("bad")

    assert run(lift_result(Ok(1)), 0).result == Ok(1)
    assert run(lift_result(Err(tree)), 0).result == Err(tree)
    with pytest.raises(TypeError):
        lift_result(1)  # type: ignore[arg-type]


class TestBind:
    def test_bind_threads_value_and_state(self):
        result = run(bind(step(2), lambda v: step(v * 10)), 1)

        assert result.value == 33
        assert result.state == 33

    def test_bind_short_circuits_on_error(self, marker):
        result = run(bind(error("stop"), lambda _: marker.track("next")), 0)

        assert result.result == Err(leaf("stop"))
        assert marker.hits == []

    def test_bind_short_circuits_on_abort_too(self, marker):
        result = run(bind(abort("fatal"), lambda _: marker.track("next")), 0)

        assert result.error_tree == leaf("fatal")
        assert result.aborted is True
        assert marker.hits == []

    def test_error_tree_passes_through_untouched(self):
        inner = error("a") | error("b")

        result = run(inner.flat_map(inject), None)

        assert result.error_tree == leaf("a").with_child(leaf("b"))

    def test_binder_must_return_alternative(self):
        with pytest.raises(TypeError, match="binder result must be an Alternative"):
            run(bind(inject(1), lambda v: v), None)  # type: ignore[arg-type, return-value]

    def test_binder_must_be_callable(self):
        with pytest.raises(TypeError):
            bind(inject(1), "nope")  # type: ignore[arg-type]

    def test_and_then_alias(self):
        assert run(inject(2).and_then(lambda v: inject(v + 1)), None).value == 3


class TestFmapApply:
    def test_fmap(self):
        assert run(fmap(str.upper, inject("abc")), None).value == "ABC"
        assert run(inject(4).map(lambda v: v * v), None).value == 16

    def test_fmap_keeps_error(self):
        assert run(fmap(str.upper, error("e")), None).error_tree == leaf("e")

    def test_matmul_operator(self):
        double = lambda v: v * 2  # noqa: E731

        assert run(double @ inject(21), None).value == 42

    def test_apply_runs_function_then_argument(self):
        def record(tag, value):
            return modify(lambda s: s + (tag,)).map(lambda _: value)

        result = run(apply(record("f", lambda v: v + 1), record("x", 41)), ())

        assert result.value == 42
        assert result.state == ("f", "x")

    def test_apply_curried_functions(self):
        add = lambda a: lambda b: a + b  # noqa: E731

        result = run((add @ inject(1)).apply(inject(2)), None)

        assert result.value == 3

    def test_apply_stops_at_first_error(self, marker):
        result = run(apply(error("no function"), marker.track("arg")), None)

        assert result.error_tree == leaf("no function")
        assert marker.hits == []


class TestSequence:
    def test_sequence_collects_in_order(self):
        result = run(sequence([step(1), step(2), step(3)]), 0)

        assert result.value == [1, 3, 6]
        assert result.state == 6

    def test_sequence_of_nothing(self):
        assert run(sequence([]), "s").value == []

    def test_sequence_stops_at_first_failure(self, marker):
        cs = [step(1), step(10), error("second"), marker.track("after"), error("third")]

        result = run(sequence(cs), 0)

        assert result.result == Err(leaf("second"))
        assert result.state == 11
        assert marker.hits == []

    def test_sequence_does_not_aggregate_errors(self):
        result = run(sequence([error("a") | error("b"), error("c")]), None)

        assert result.error_tree == leaf("a").with_child(leaf("b"))

    def test_sequence_accepts_iterators(self):
        result = run(sequence(inject(i) for i in range(3)), None)

        assert result.value == [0, 1, 2]

    def test_sequence_rejects_non_alternatives(self):
        with pytest.raises(TypeError):
            sequence([inject(1), 2])  # type: ignore[list-item]

    def test_long_sequence_is_stack_safe(self):
        result = run(sequence([step(1) for _ in range(10000)]), 0)

        assert result.state == 10000
        assert result.value[-1] == 10000

    def test_traverse(self):
        result = run(traverse("abc", lambda ch: put(ch).map(lambda _: ch * 2)), "")

        assert result.value == ["aa", "bb", "cc"]
        assert result.state == "c"

    def test_traverse_calls_function_only_when_run(self):
        calls = []

        def f(item):
            calls.append(item)
            return inject(item * 10)

        alt = traverse([1, 2, 3], f)
        assert calls == []

        assert run(alt, None).value == [10, 20, 30]
        assert calls == [1, 2, 3]
        assert run(alt, None).value == [10, 20, 30]
        assert calls == [1, 2, 3, 1, 2, 3]

    def test_traverse_stops_calling_after_failure(self):
        calls = []

        def f(item):
            calls.append(item)
            return error(item) if item == 2 else inject(item)

        result = run(traverse([1, 2, 3], f), None)

        assert result.error_tree == leaf(2)
        assert calls == [1, 2]

    def test_traverse_rejects_non_alternative_results(self):
        with pytest.raises(TypeError, match="traverse result must be an Alternative"):
            run(traverse([1], lambda item: item), None)  # type: ignore[arg-type, return-value]
