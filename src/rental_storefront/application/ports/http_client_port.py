from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol
import json


class HttpResponse:
    def __init__(
        self,
        status_code: int,
        text: str,
        url: str,
        headers: Mapping[str, str],
        *,
        raw: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.text = text
        self.url = url
        self.headers = dict(headers)
        self._raw = raw

    def json(self) -> Any:
        if self._raw is not None and hasattr(self._raw, "json"):
            return self._raw.json()
        return json.loads(self.text)


class HttpClientPort(Protocol):
    """Minimal JSON client for the storefront API. Paths are relative to the base URL.

    Implementations raise ``TransportError`` when the server is unreachable and
    ``ApiError`` for any 4xx/5xx answer.
    """

    def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> HttpResponse: ...
    def post(self, path: str, *, json: Any | None = None) -> HttpResponse: ...
    def patch(self, path: str, *, json: Any | None = None) -> HttpResponse: ...
    def delete(self, path: str) -> HttpResponse: ...
    def close(self) -> None: ...
