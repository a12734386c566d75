"""SQLite storage for favourites, user data and per-project engine choices."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

import platformdirs

log = logging.getLogger(__name__)

_APP_DIR = "epic_asset_manager"
_DB_FILE = "eam.db"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS unreal_project_latest_engine (
    project TEXT PRIMARY KEY NOT NULL,
    engine TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS favorite_asset (
    asset TEXT PRIMARY KEY NOT NULL
);
CREATE TABLE IF NOT EXISTS user_data (
    name TEXT PRIMARY KEY NOT NULL,
    value TEXT NOT NULL
);
"""


def default_path() -> Path:
    """Return the location of the application's database file."""
    return Path(platformdirs.user_data_dir()) / _APP_DIR / _DB_FILE


def open_default() -> "Database":
    """Open the database at the default location, creating it if needed."""
    path = default_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    database = Database(path)
    log.info("Database initialized.")
    return database


class Database:
    """A connection to the application database with its tables in place."""

    def __init__(self, path):
        self.path = Path(path)
        self._conn = sqlite3.connect(str(self.path))
        log.info("Running DB migrations...")
        self._conn.executescript(_SCHEMA)
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def is_favorite(self, asset: str) -> bool:
        row = self._conn.execute(
            "SELECT EXISTS(SELECT 1 FROM favorite_asset WHERE asset = ?)", (asset,)
        ).fetchone()
        return bool(row[0])

    def add_favorite(self, asset: str) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT OR IGNORE INTO favorite_asset (asset) VALUES (?)", (asset,)
            )

    def remove_favorite(self, asset: str) -> None:
        with self._conn:
            self._conn.execute("DELETE FROM favorite_asset WHERE asset = ?", (asset,))

    def favorites(self) -> list[str]:
        rows = self._conn.execute("SELECT asset FROM favorite_asset ORDER BY asset")
        return [asset for (asset,) in rows]

    def set_user_data(self, name: str, value: str) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO user_data (name, value) VALUES (?, ?)",
                (name, value),
            )

    def user_data(self, name: str) -> str | None:
        row = self._conn.execute(
            "SELECT value FROM user_data WHERE name = ?", (name,)
        ).fetchone()
        return row[0] if row else None

    def set_latest_engine(self, project: str, engine: str) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT OR REPLACE INTO unreal_project_latest_engine (project, engine) "
                "VALUES (?, ?)",
                (project, engine),
            )

    def latest_engine(self, project: str) -> str | None:
        row = self._conn.execute(
            "SELECT engine FROM unreal_project_latest_engine WHERE project = ?",
            (project,),
        ).fetchone()
        return row[0] if row else None