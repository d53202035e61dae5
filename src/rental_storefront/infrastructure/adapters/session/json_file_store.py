from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from rental_storefront.application.ports.session_persistence_port import (
    SESSION_STORAGE_KEY,
    SessionPersistencePort,
)

logger = logging.getLogger(__name__)


class JsonFileSessionPersistence(SessionPersistencePort):
    """Keeps the session document in a JSON file, keyed like browser storage.

    The file maps storage keys to documents, so other records can live beside the
    session. Writes go to a temp file that is then renamed over the original.
    """

    def __init__(self, path: str | Path, key: str = SESSION_STORAGE_KEY) -> None:
        self._path = Path(path)
        self._key = key

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("session_file_unreadable path=%s", self._path, exc_info=True)
            return {}
        return data if isinstance(data, dict) else {}

    def read(self) -> Any | None:
        document = self._read_all().get(self._key)
        logger.debug("session_file_read path=%s hit=%s", self._path, document is not None)
        return document

    def write(self, payload: dict[str, Any]) -> None:
        data = self._read_all()
        data[self._key] = payload
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("session_file_written path=%s", self._path)
