from __future__ import annotations

import json
from collections.abc import Mapping

from rental_storefront.application.errors import ApiError

DEFAULT_HEADERS: Mapping[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/json",
    "ngrok-skip-browser-warning": "true",
    "User-Agent": "rental-storefront/0.1",
}

# methods that carry the admin bearer token when one is configured
ADMIN_METHODS = frozenset({"POST", "PATCH", "DELETE"})


def auth_headers(method: str, admin_token: str | None) -> dict[str, str]:
    if admin_token and method.upper() in ADMIN_METHODS:
        return {"Authorization": f"Bearer {admin_token}"}
    return {}


def server_message(text: str) -> str | None:
    """Extracts the human-readable message from an error payload, if any."""
    try:
        body = json.loads(text) if text else None
    except ValueError:
        return None
    if not isinstance(body, Mapping):
        return None
    for key in ("message", "error", "detail"):
        value = body.get(key)
        if isinstance(value, Mapping):
            value = value.get("message")
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def api_error_for(method: str, url: str, status_code: int, text: str) -> ApiError:
    message = server_message(text)
    return ApiError(
        message or f"{method} {url} -> {status_code}",
        status_code=status_code,
        server_message=message,
    )
