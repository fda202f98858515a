"""
Minimal Result sum type shared by every dochoice layer.

``Err`` carries an :class:`~dochoice.error_tree.ErrorTree` rather than an
exception, so failures stay plain data until a caller explicitly unwraps them.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar, cast

from frozendict import frozendict

if TYPE_CHECKING:
    from dochoice.error_tree import ErrorTree

# =========================================================
# Type Vars
# =========================================================
T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
U = TypeVar("U")


class Result(Generic[T_co]):
    """Sum type representing either a successful value or an error tree."""

    __slots__ = ()

    def is_ok(self) -> bool:
        """Return ``True`` when the result is successful."""

        return isinstance(self, Ok)

    def is_err(self) -> bool:
        """Return ``True`` when the result represents a failure."""

        return isinstance(self, Err)

    def ok(self) -> T_co | None:
        """Return the contained value, or ``None`` if this is an error."""

        if isinstance(self, Ok):
            return self.value
        return None

    def err(self) -> ErrorTree[Any] | None:
        """Return the contained error tree, or ``None`` if this is a success."""

        if isinstance(self, Err):
            return self.error
        return None

    def unwrap(self) -> T_co:
        """Return the value or raise :class:`AlternativeFailure`."""

        if isinstance(self, Ok):
            return self.value
        from dochoice.errors import AlternativeFailure

        raise AlternativeFailure(cast(Err, self).error)

    def unwrap_err(self) -> ErrorTree[Any]:
        """Return the error tree or raise ``RuntimeError`` if this is a success."""

        if isinstance(self, Err):
            return self.error
        raise RuntimeError("Called unwrap_err on Ok value")

    def map(self, f: Callable[[T_co], U]) -> Result[U]:
        """Apply ``f`` to the contained value if this is a success."""

        if isinstance(self, Ok):
            return Ok(f(self.value))
        return cast(Result[U], self)

    def map_err(self, f: Callable[[ErrorTree[Any]], ErrorTree[Any]]) -> Result[T_co]:
        """Apply ``f`` to the contained error tree if this is a failure."""

        if isinstance(self, Err):
            from dochoice.error_tree import ErrorTree

            tree = f(self.error)
            if not isinstance(tree, ErrorTree):
                raise TypeError("map_err must return an ErrorTree instance")
            return Err(tree)
        return self

    def unwrap_or(self, default: U) -> T_co | U:
        """Return the contained value, or ``default`` if this is an error."""

        if isinstance(self, Ok):
            return self.value
        return default

    def unwrap_or_else(self, default_fn: Callable[[ErrorTree[Any]], U]) -> T_co | U:
        """Return the contained value, or compute a default from the error tree."""

        if isinstance(self, Ok):
            return self.value
        return default_fn(cast(Err, self).error)

    def and_then(self, f: Callable[[T_co], Result[U]]) -> Result[U]:
        """Chain computations that return ``Result``."""

        if isinstance(self, Ok):
            result = f(self.value)
            if not isinstance(result, Result):
                raise TypeError("and_then must return a Result instance")
            return result
        return cast(Result[U], self)

    def __bool__(self) -> bool:
        """Truthiness matches :meth:`is_ok`."""

        return self.is_ok()


@dataclass(frozen=True)
class Ok(Result[T], Generic[T]):
    """Success result."""
    value: T


@dataclass(frozen=True)
class Err(Result[NoReturn]):
    """Error result holding the failure tree."""
    error: ErrorTree[Any]


# =========================================================
# Frozen Dict
# =========================================================
# Immutable mapping suited to user states threaded through alternatives:
# a snapshot taken before a branch cannot be disturbed by the branch.
FrozenDict = frozendict

__all__ = [
    "Err",
    "FrozenDict",
    "Ok",
    "Result",
]
