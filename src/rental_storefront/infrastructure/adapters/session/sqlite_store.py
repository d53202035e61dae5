from __future__ import annotations

import json
import logging
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from rental_storefront.application.ports.session_persistence_port import (
    SESSION_STORAGE_KEY,
    SessionPersistencePort,
)

SCHEMA = """
CREATE TABLE IF NOT EXISTS storefront_state (
  key TEXT PRIMARY KEY,
  payload TEXT NOT NULL,
  updated_at TEXT NOT NULL
);
"""

logger = logging.getLogger(__name__)


class SQLiteSessionPersistence(SessionPersistencePort):
    """SQLite-backed session store. Persists the session document across restarts.

    File path configurable; creates schema on first use.
    """

    def __init__(self, db_path: str = ".rental_storefront.sqlite", key: str = SESSION_STORAGE_KEY) -> None:
        self._path = Path(db_path)
        self._key = key
        self._conn = sqlite3.connect(self._path, check_same_thread=False)
        self._conn.execute("PRAGMA journal_mode=WAL;")
        self._conn.executescript(SCHEMA)
        self._conn.commit()

    def read(self) -> Any | None:
        cur = self._conn.execute("SELECT payload FROM storefront_state WHERE key=?", (self._key,))
        row = cur.fetchone()
        if not row:
            return None
        try:
            return json.loads(row[0])
        except ValueError:
            logger.warning("session_row_unreadable key=%s", self._key)
            return None

    def write(self, payload: dict[str, Any]) -> None:
        with self._conn:
            self._conn.execute(
                "INSERT INTO storefront_state (key, payload, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET payload=excluded.payload, updated_at=excluded.updated_at",
                (self._key, json.dumps(payload), datetime.now(UTC).isoformat()),
            )

    def close(self) -> None:
        self._conn.close()
