from __future__ import annotations

import json
from typing import Any

from rental_storefront.application.ports.session_persistence_port import SessionPersistencePort


class InMemorySessionPersistence(SessionPersistencePort):
    """Simple in-memory store for development and tests. Not persistent.

    Documents go through a JSON round-trip so callers never share mutable state.
    """

    def __init__(self, initial: Any | None = None) -> None:
        self._document: str | None = json.dumps(initial) if initial is not None else None
        self.writes = 0

    def read(self) -> Any | None:
        return json.loads(self._document) if self._document is not None else None

    def write(self, payload: dict[str, Any]) -> None:
        self._document = json.dumps(payload)
        self.writes += 1
