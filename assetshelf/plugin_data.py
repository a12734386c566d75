"""Unreal plugin descriptors (.uplugin) and plugin list items."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

log = logging.getLogger(__name__)


def _pascal(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def _load(cls, data: Any, nested: Mapping[str, type] | None = None):
    if not isinstance(data, Mapping):
        raise ValueError(f"{cls.__name__} entry must be a JSON object")
    nested = nested or {}
    kwargs = {}
    for f in fields(cls):
        key = f.metadata.get("key", _pascal(f.name))
        if key not in data:
            continue
        value = data[key]
        if f.name in nested and value is not None:
            value = [nested[f.name].from_dict(item) for item in value]
        kwargs[f.name] = value
    return cls(**kwargs)


@dataclass
class Module:
    name: str
    type_field: str = field(default="", metadata={"key": "Type"})
    loading_phase: str = ""
    additional_dependencies: list[str] | None = None
    platform_allow_list: list[str] = field(default_factory=list)
    program_allow_list: list[str] = field(default_factory=list)
    target_deny_list: list[str] = field(default_factory=list)
    platform_deny_list: list[str] = field(default_factory=list)
    target_configuration_deny_list: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data) -> "Module":
        if isinstance(data, Mapping) and "Name" not in data:
            raise ValueError("module entry has no Name")
        return _load(cls, data)


@dataclass
class PluginReference:
    name: str = ""
    enabled: bool = False
    marketplace_url: str | None = None
    supported_target_platforms: list[str] | None = None
    platform_allow_list: list[str] = field(default_factory=list)
    target_allow_list: list[str] = field(default_factory=list)
    target_deny_list: list[str] = field(default_factory=list)
    optional: bool | None = None
    platform_deny_list: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data) -> "PluginReference":
        return _load(cls, data)


@dataclass
class Uplugin:
    file_version: int = 0
    version: int = 0
    version_name: str = ""
    friendly_name: str = ""
    description: str = ""
    category: str = ""
    created_by: str = ""
    docs_url: str = ""
    marketplace_url: str = ""
    support_url: str = ""
    engine_version: list[str] | None = None
    editor_custom_virtual_path: list[str] | None = None
    enabled_by_default: bool | None = None
    can_contain_content: bool | None = None
    can_contain_verse: bool | None = None
    is_beta_version: bool | None = None
    is_experimental_version: bool | None = None
    installed: bool | None = None
    supported_target_platforms: list[str] | None = None
    supported_programs: list[str] | None = None
    b_is_plugin_extension: bool | None = None
    hidden: bool | None = None
    explicitly_loaded: bool | None = None
    has_explicit_platforms: bool | None = None
    pre_build_steps: dict[str, list[str]] | None = None
    post_build_steps: dict[str, list[str]] | None = None
    plugins: list[PluginReference] | None = None
    modules: list[Module] | None = None
    editor_only: bool | None = None
    is_hidden: bool | None = None
    is_experimental: bool | None = None
    localization_targets: list[dict[str, str]] = field(default_factory=list)
    requires_build_platform: bool | None = None
    can_be_used_with_unreal_header_tool: bool | None = None

    @classmethod
    def from_dict(cls, data) -> "Uplugin":
        return _load(cls, data, {"plugins": PluginReference, "modules": Module})


def read_uplugin(path) -> Uplugin:
    """Read a .uplugin file; a missing or unreadable file gives an empty descriptor.

    Malformed contents raise ``ValueError``.
    """
    try:
        contents = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return Uplugin()
    return Uplugin.from_dict(json.loads(contents))


class PluginData:
    """A plugin shown in a project's or engine's plugin list."""

    def __init__(self, path, name):
        self.path: str | None = path
        self.name: str | None = name
        self.guid: str | None = None
        self.uplugin: Uplugin | None = None
        self.last_message: Any = None

    def update(self, msg) -> None:
        """Record a message sent to this plugin item."""
        self.last_message = msg
        log.debug("Update for %r", self.name)

    def __repr__(self) -> str:
        return f"PluginData(path={self.path!r}, name={self.name!r})"