"""
Pytest configuration for dochoice tests.

Provides a marker recorder so tests can prove that an alternative was (or was
never) executed.
"""

from typing import Any

import pytest

from dochoice import Alternative, catch


class Marker:
    """Records the names of alternatives that actually ran, in order."""

    def __init__(self) -> None:
        self.hits: list[str] = []

    def hit(self, name: str, value: Any = None) -> Any:
        self.hits.append(name)
        return name if value is None else value

    def track(self, name: str, value: Any = None) -> Alternative[Any, Any, Any]:
        """An Alternative that records ``name`` when run and succeeds."""
        return catch(lambda: self.hit(name, value))

    def fired(self, name: str) -> bool:
        return name in self.hits


@pytest.fixture
def marker() -> Marker:
    """Fresh side-effect recorder for each test."""
    return Marker()
