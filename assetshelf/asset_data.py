"""Marketplace assets as shown in the asset browser."""

from __future__ import annotations

import enum
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from assetshelf.asset_info import AssetInfo
from assetshelf.database import Database

log = logging.getLogger(__name__)


class AssetKind(enum.Enum):
    ASSET = "asset"
    PROJECT = "projects"
    GAME = "games"
    ENGINE = "engines"
    PLUGIN = "plugins"


_CATEGORY_KINDS = {
    "assets": AssetKind.ASSET,
    "games": AssetKind.GAME,
    "plugins": AssetKind.PLUGIN,
    "projects": AssetKind.PROJECT,
    "engines": AssetKind.ENGINE,
}


def decide_kind(asset: AssetInfo) -> AssetKind | None:
    """Return the kind given by the first category that names one."""
    for category in asset.categories or ():
        kind = _CATEGORY_KINDS.get(category.path)
        if kind is not None:
            return kind
    return None


def downloaded_locations(directories: Iterable, asset_id: str) -> list[Path]:
    """Return the vault directories that hold downloaded data for ``asset_id``."""
    candidates = (Path(directory) / asset_id / "data" for directory in directories)
    return [path for path in candidates if path.exists()]


class AssetData:
    """An asset in the browser, with its favourite and download state."""

    def __init__(
        self,
        asset: AssetInfo,
        image=None,
        database: Database | None = None,
        vault_directories: Iterable = (),
    ):
        self.asset = asset
        self.id: str = asset.id
        self.image = image
        self.database = database
        self.vault_directories = list(vault_directories)
        self.favorite = False
        self.downloaded = False
        self._refreshed: list[Callable[["AssetData"], None]] = []
        self.check_favorite()
        self.name: str | None = asset.title
        self.check_downloaded()
        self._kind = decide_kind(asset)

    def kind(self) -> AssetKind | None:
        return self._kind

    def release(self) -> datetime | None:
        """Date of the latest release, or the last modification without releases."""
        latest = self.asset.latest_release()
        if latest is None:
            return self.asset.last_modified_date
        return latest.date_added

    def last_modified(self) -> datetime | None:
        return self.asset.last_modified_date

    def _has_category(self, cat: str) -> bool:
        if cat == "favorites":
            return self.favorite
        if cat == "downloaded":
            return self.downloaded
        wanted = cat.lower()
        return any(wanted in c.path.lower() for c in self.asset.categories or ())

    def check_category(self, cat: str) -> bool:
        """Evaluate a filter such as ``assets&!favorites|games`` left to right.

        ``&`` and ``|`` bind to everything on their right; ``!`` negates one term.
        """
        term = cat
        for position, char in enumerate(cat):
            if char in "|&":
                term = cat[:position]
                break
        if term.startswith("!"):
            result = not self._has_category(term[1:])
        else:
            result = self._has_category(term)
        if len(term) >= len(cat):
            return result
        operator = cat[len(term)]
        remainder = cat[len(term) + 1:]
        if operator == "&":
            return self.check_category(remainder) if result else False
        return result or self.check_category(remainder)

    def check_downloaded(self) -> None:
        """Look for any release of the asset in the vault directories."""
        for release in self.asset.release_info or ():
            if release.app_id and downloaded_locations(
                self.vault_directories, release.app_id
            ):
                self.downloaded = True
                return
        self.downloaded = False

    def check_favorite(self) -> None:
        """Read the favourite flag from the database."""
        if self.database is None:
            self.favorite = False
            return
        try:
            self.favorite = self.database.is_favorite(self.id)
        except sqlite3.Error as exc:
            log.debug("Favorite lookup failed: %s", exc)
            self.favorite = False

    def connect_refreshed(self, callback: Callable[["AssetData"], None]) -> None:
        """Call ``callback`` with this asset after every refresh."""
        self._refreshed.append(callback)

    def refresh(self) -> None:
        """Re-read favourite and download state and notify listeners."""
        self.check_favorite()
        self.check_downloaded()
        for callback in self._refreshed:
            callback(self)

    def __repr__(self) -> str:
        return f"AssetData(id={self.id!r}, name={self.name!r})"