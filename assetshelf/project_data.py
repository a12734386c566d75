"""Unreal project descriptors (.uproject) and project list items."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Mapping

from assetshelf.plugin_data import Module, PluginReference

log = logging.getLogger(__name__)

_SCREENSHOT_DIR = "Saved"
_SCREENSHOT_FILE = "AutoScreenshot.png"


def _pascal(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


@dataclass
class Uproject:
    """The contents of a .uproject file."""

    file_version: int = 0
    engine_association: str = ""
    category: str = ""
    description: str = ""
    modules: list[Module] | None = None
    plugins: list[PluginReference] | None = None
    disable_engine_plugins_by_default: bool | None = None
    enterprise: bool | None = None
    additional_plugin_directories: list[str] | None = None
    additional_root_directories: list[str] | None = None
    target_platforms: list[str] | None = None
    epic_sample_name_hash: str | None = None
    pre_build_steps: dict[str, list[str]] | None = None
    post_build_steps: dict[str, list[str]] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Uproject":
        """Build a descriptor from its JSON form; missing fields take defaults."""
        if not isinstance(data, Mapping):
            raise ValueError("project descriptor must be a JSON object")
        nested = {"modules": Module, "plugins": PluginReference}
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            key = _pascal(f.name)
            if key not in data:
                continue
            value = data[key]
            if f.name in nested and value is not None:
                if not isinstance(value, list):
                    raise ValueError(f"{key} must be a list")
                value = [nested[f.name].from_dict(item) for item in value]
            kwargs[f.name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class ThumbnailMsg:
    """A project screenshot has been loaded."""

    image: bytes


def read_uproject(path) -> Uproject:
    """Read a .uproject file.

    A missing or unreadable file, or one that does not parse, gives an empty
    descriptor; parse failures are logged.
    """
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return Uproject()
    try:
        return Uproject.from_dict(json.loads(contents))
    except (ValueError, TypeError) as exc:
        log.error("Unable to parse uproject %s: %s", path, exc)
        return Uproject()


def thumbnail_location(path) -> Path | None:
    """Return where a project's automatic screenshot lives, or None without a parent."""
    project = Path(path)
    parent = project.parent
    if parent == project:
        return None
    return parent / _SCREENSHOT_DIR / _SCREENSHOT_FILE


class ProjectData:
    """A project shown in the projects list."""

    def __init__(self, path, name):
        self.path: str | None = path
        self.name: str | None = name
        self.guid: str | None = None
        self.image: bytes | None = None
        self._finished: list[Callable[["ProjectData"], None]] = []
        uproject = read_uproject(path)
        uproject.engine_association = "".join(
            c for c in uproject.engine_association if c not in "{}"
        )
        self.uproject: Uproject | None = uproject
        if self.path is not None:
            self.load_thumbnail()

    def connect_finished(self, callback: Callable[["ProjectData"], None]) -> None:
        """Call ``callback`` with this project each time an update is applied."""
        self._finished.append(callback)

    def load_thumbnail(self) -> bool:
        """Load the project's screenshot if there is one; tell whether it was loaded."""
        if self.path is None:
            return False
        location = thumbnail_location(self.path)
        if location is None:
            return False
        if not location.exists():
            log.info("No project picture exists for %s", self.path)
            return False
        try:
            data = location.read_bytes()
        except OSError as exc:
            log.error("Unable to load file to texture: %s", exc)
            return False
        self.update(ThumbnailMsg(data))
        return True

    def update(self, msg: ThumbnailMsg) -> None:
        """Apply a message and notify listeners."""
        if not isinstance(msg, ThumbnailMsg):
            raise TypeError(f"unknown project message: {msg!r}")
        self.image = msg.image
        for callback in self._finished:
            callback(self)

    def __repr__(self) -> str:
        return f"ProjectData(path={self.path!r}, name={self.name!r})"