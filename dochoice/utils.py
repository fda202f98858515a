"""
Utility functions for the dochoice library.
"""

import os

# Environment variable to control debug mode
DEBUG_ALTERNATIVE = os.environ.get("DOCHOICE_DEBUG", "").lower() in ("1", "true", "yes")


def short_repr(value: object, max_length: int = 80) -> str:
    """Return ``repr(value)`` truncated for log lines."""

    text = repr(value)
    if len(text) > max_length:
        return f"{text[: max_length - 3]}..."
    return text


__all__ = [
    "DEBUG_ALTERNATIVE",
    "short_repr",
]
