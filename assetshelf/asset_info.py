"""Marketplace asset descriptions and filtering on them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping


def _parse_date(value: Any) -> datetime | None:
    if not value:
        return None
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class Category:
    path: str


@dataclass
class KeyImage:
    type: str
    url: str
    md5: str = ""
    width: int = 0
    height: int = 0
    size: int = 0
    uploaded_date: datetime | None = None


@dataclass
class ReleaseInfo:
    id: str | None = None
    app_id: str | None = None
    compatible_apps: list[str] | None = None
    platform: list[str] | None = None
    date_added: datetime | None = None


def _category(data: Mapping[str, Any]) -> Category:
    return Category(path=data.get("path", ""))


def _key_image(data: Mapping[str, Any]) -> KeyImage:
    return KeyImage(
        type=data.get("type", ""),
        url=data.get("url", ""),
        md5=data.get("md5", ""),
        width=data.get("width", 0),
        height=data.get("height", 0),
        size=data.get("size", 0),
        uploaded_date=_parse_date(data.get("uploadedDate")),
    )


def _release_info(data: Mapping[str, Any]) -> ReleaseInfo:
    return ReleaseInfo(
        id=data.get("id"),
        app_id=data.get("appId"),
        compatible_apps=data.get("compatibleApps"),
        platform=data.get("platform"),
        date_added=_parse_date(data.get("dateAdded")),
    )


def _list_of(items: Any, convert) -> list | None:
    if items is None:
        return None
    return [convert(item) for item in items]


@dataclass
class AssetInfo:
    id: str
    title: str | None = None
    description: str | None = None
    namespace: str | None = None
    categories: list[Category] | None = None
    key_images: list[KeyImage] | None = None
    release_info: list[ReleaseInfo] | None = None
    last_modified_date: datetime | None = None
    extra: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetInfo":
        """Build an asset from its JSON description."""
        if not isinstance(data, Mapping) or "id" not in data:
            raise ValueError("asset description needs an 'id'")
        known = {
            "id", "title", "description", "namespace", "categories",
            "keyImages", "releaseInfo", "lastModifiedDate",
        }
        return cls(
            id=data["id"],
            title=data.get("title"),
            description=data.get("description"),
            namespace=data.get("namespace"),
            categories=_list_of(data.get("categories"), _category),
            key_images=_list_of(data.get("keyImages"), _key_image),
            release_info=_list_of(data.get("releaseInfo"), _release_info),
            last_modified_date=_parse_date(data.get("lastModifiedDate")),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def latest_release(self) -> ReleaseInfo | None:
        """Return the most recently added release, if any."""
        if not self.release_info:
            return None
        oldest = datetime.min.replace(tzinfo=timezone.utc)
        return max(self.release_info, key=lambda r: r.date_added or oldest)

    def thumbnail(self) -> KeyImage | None:
        """Return the first image usable as a thumbnail."""
        for image in self.key_images or ():
            if image.type.lower() in ("thumbnail", "dieselgamebox"):
                return image
        return None

    def matches_filter(self, tag: str | None, search: str | None) -> bool:
        """Tell whether the asset is in category ``tag`` and its title holds ``search``."""
        if tag is None:
            tag_found = True
        else:
            tag_found = any(tag in c.path for c in self.categories or ())
        if search is None:
            return tag_found
        if not tag_found:
            return False
        if self.title is None:
            return True
        return search.lower() in self.title.lower()