"""SQLite key-value store and the location cache built on it."""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Protocol

from pulse_dashboard.models import Coordinates


logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """String-keyed persistent storage."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class SqliteKeyValueStore:
    """SQLite-backed string store."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._init_db()

    def _get_connection(self) -> sqlite3.Connection:
        """Get database connection with row factory."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never set."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM settings WHERE key = ?",
                (key,),
            ).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        """Store or overwrite a value."""
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO settings (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                (key, value, datetime.now().isoformat()),
            )


class LocationCache:
    """
    The single remembered coordinate pair.

    Written on every successful location acquisition and read on every
    aggregate refresh. Entries are never expired or removed.
    """

    KEY = "location.coordinates"

    def __init__(self, store: KeyValueStore, key: str = KEY) -> None:
        self.store = store
        self.key = key

    def get(self) -> Coordinates | None:
        """Return cached coordinates, or None when nothing usable is stored."""
        raw = self.store.get(self.key)
        if raw is None:
            return None

        try:
            record = json.loads(raw)
            return Coordinates(record["lat"], record["lon"])
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable cached location {raw!r}: {e}")
            return None

    def set(self, coordinates: Coordinates) -> None:
        """Overwrite the cached coordinates."""
        self.store.set(
            self.key,
            json.dumps({"lat": coordinates.latitude, "lon": coordinates.longitude}),
        )
        logger.info(
            f"Cached location {coordinates.latitude:.4f}, {coordinates.longitude:.4f}"
        )
