"""
dochoice - Backtracking computations with do-notation for Python.

An Alternative threads a caller-owned state, produces either a value or an
ErrorTree, and supports choice with automatic state rollback. It is meant as
the substrate for recursive-descent parsers and similar search code.

Example:
    >>> from dochoice import do, error, get, put, run
    >>>
    >>> @do
    ... def take(expected):
    ...     rest = yield get()
    ...     if not rest or rest[0] != expected:
    ...         yield error(f"expected {expected!r}")
    ...     yield put(rest[1:])
    ...     return expected
    >>>
    >>> run(take("a") | take("b"), "bc").value
    'b'
"""

from dochoice._vendor import Err, FrozenDict, Ok, Result
from dochoice.alternative import Alternative
from dochoice.combinators import (
    alt_or,
    alt_or_right_assoc,
    apply,
    bind,
    choice,
    fmap,
    inject,
    lift_result,
    sequence,
    traverse,
)
from dochoice.control import abort, catch, error, get, modify, put
from dochoice.do import AltGenerator, DoFunction, do
from dochoice.error_tree import ErrorTree, leaf
from dochoice.errors import AlternativeFailure, DochoiceError
from dochoice.interpreter import run_state
from dochoice.run import RunResult, run, run_alternative
from dochoice.state import Get, Modify, Pure, Put, StateProgram, state_do

__version__ = "0.1.0"

__all__ = [
    "AltGenerator",
    "Alternative",
    "AlternativeFailure",
    "DoFunction",
    "DochoiceError",
    "Err",
    "ErrorTree",
    "FrozenDict",
    "Get",
    "Modify",
    "Ok",
    "Pure",
    "Put",
    "Result",
    "RunResult",
    "StateProgram",
    "abort",
    "alt_or",
    "alt_or_right_assoc",
    "apply",
    "bind",
    "catch",
    "choice",
    "do",
    "error",
    "fmap",
    "get",
    "inject",
    "leaf",
    "lift_result",
    "modify",
    "put",
    "run",
    "run_alternative",
    "run_state",
    "sequence",
    "state_do",
    "traverse",
]
