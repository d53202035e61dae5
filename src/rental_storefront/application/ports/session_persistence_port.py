from __future__ import annotations

from typing import Any, Protocol

SESSION_STORAGE_KEY = "rental-storefront:session"


class SessionPersistencePort(Protocol):
    """Durable storage for the session document (one record under a fixed key)."""

    def read(self) -> Any | None:
        """Returns the stored document as decoded JSON, or None when nothing is stored.

        Corrupt content is returned as-is or as None; sanitizing is the caller's job.
        """
        ...

    def write(self, payload: dict[str, Any]) -> None:
        """Replaces the stored document. Raises on failure; partial writes are not visible."""
        ...
