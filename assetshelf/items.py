"""Simple list items: browse categories and log files."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CategoryData:
    """A category entry shown in the asset browser."""

    name: str
    filter: str
    path: str
    leaf: bool


@dataclass(frozen=True)
class LogData:
    """A log file belonging to a project or engine."""

    path: str
    name: str
    crash: bool