"""Unreal Engine installations and their version descriptors."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Union

log = logging.getLogger(__name__)

_INT_FIELDS = {
    "major_version": "MajorVersion",
    "minor_version": "MinorVersion",
    "patch_version": "PatchVersion",
    "changelist": "Changelist",
    "compatible_changelist": "CompatibleChangelist",
    "is_licensee_version": "IsLicenseeVersion",
    "is_promoted_build": "IsPromotedBuild",
}


@dataclass
class UnrealVersion:
    """The contents of an engine's Build.version file."""

    major_version: int = 0
    minor_version: int = 0
    patch_version: int = 0
    changelist: int = 0
    compatible_changelist: int = 0
    is_licensee_version: int = 0
    is_promoted_build: int = 0
    branch_name: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "UnrealVersion":
        """Build a version from its JSON form; missing fields take defaults."""
        if not isinstance(data, Mapping):
            raise ValueError("version descriptor must be a JSON object")
        kwargs: dict[str, Any] = {}
        for name, key in _INT_FIELDS.items():
            if key in data:
                value = data[key]
                if isinstance(value, bool) or not isinstance(value, int):
                    raise ValueError(f"{key} must be an integer")
                kwargs[name] = value
        if "BranchName" in data:
            branch = data["BranchName"]
            if not isinstance(branch, str):
                raise ValueError("BranchName must be a string")
            kwargs["branch_name"] = branch
        return cls(**kwargs)

    def format(self) -> str:
        """Return ``major.minor.patch``, or the branch name for an invalid version."""
        if self.valid():
            return f"{self.major_version}.{self.minor_version}.{self.patch_version}"
        return self.branch_name

    def valid(self) -> bool:
        """A version is invalid only when every number in it is -1."""
        numbers = (
            self.major_version,
            self.minor_version,
            self.patch_version,
            self.changelist,
            self.compatible_changelist,
            self.is_licensee_version,
            self.is_promoted_build,
        )
        return not all(n == -1 for n in numbers)

    def compare(self, other: "UnrealVersion") -> int:
        """Order by major, minor and patch; invalid versions sort last.

        Returns -1, 0 or 1.
        """
        if not self.valid():
            return 1
        if not other.valid():
            return -1
        mine = (self.major_version, self.minor_version, self.patch_version)
        theirs = (other.major_version, other.minor_version, other.patch_version)
        return (mine > theirs) - (mine < theirs)


@dataclass(frozen=True)
class UpdateMsg:
    """Whether the engine's repository has newer commits upstream."""

    waiting: bool


@dataclass(frozen=True)
class BranchMsg:
    """The branch the engine's repository is on."""

    branch: str


Msg = Union[UpdateMsg, BranchMsg]


def read_engine_version(path) -> UnrealVersion | None:
    """Read ``Engine/Build/Build.version`` below an engine directory.

    Returns None when the file cannot be read and a default version when its
    contents cannot be parsed.
    """
    location = Path(path) / "Engine" / "Build" / "Build.version"
    try:
        contents = location.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    try:
        return UnrealVersion.from_dict(json.loads(contents))
    except ValueError:
        return UnrealVersion()


class EngineData:
    """An installed engine shown in the engines list."""

    def __init__(self, path, guid, version: UnrealVersion):
        self.path: str | None = path
        self.guid: str | None = guid
        self.ueversion: UnrealVersion | None = version
        self.version: str | None = version.format()
        self.needs_update = False
        self.branch: str | None = None
        self.has_branch = False
        self._finished: list[Callable[["EngineData"], None]] = []

    def connect_finished(self, callback: Callable[["EngineData"], None]) -> None:
        """Call ``callback`` with this engine each time an update is applied."""
        self._finished.append(callback)

    def update(self, msg: Msg) -> None:
        """Apply a status message and notify listeners."""
        if isinstance(msg, UpdateMsg):
            self.needs_update = msg.waiting
        elif isinstance(msg, BranchMsg):
            self.has_branch = bool(msg.branch)
            self.branch = msg.branch
        else:
            raise TypeError(f"unknown engine message: {msg!r}")
        for callback in self._finished:
            callback(self)

    def valid(self) -> bool:
        return self.ueversion is not None and self.ueversion.valid()

    def __repr__(self) -> str:
        return f"EngineData(path={self.path!r}, guid={self.guid!r}, version={self.version!r})"