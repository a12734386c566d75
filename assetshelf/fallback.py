"""Pick a value unless it is empty."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def either(value: T, other: T) -> T:
    """Return ``value`` unless it is empty, in which case return ``other``."""
    return other if len(value) == 0 else value