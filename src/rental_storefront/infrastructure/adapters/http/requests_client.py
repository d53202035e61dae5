from __future__ import annotations

import logging
from typing import Mapping, Any

import requests

from rental_storefront.application.errors import TransportError
from rental_storefront.application.ports.http_client_port import HttpClientPort, HttpResponse
from rental_storefront.infrastructure.adapters.http.common import DEFAULT_HEADERS, api_error_for, auth_headers

logger = logging.getLogger(__name__)


class RequestsHttpClient(HttpClientPort):
    """HTTP client adapter backed by a persistent requests.Session.

    - Same contract as HttpxClient: base URL resolution, admin bearer token,
      TransportError / ApiError mapping
    - Logs one line per request at DEBUG level
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 12.0,
        *,
        admin_token: str | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._admin_token = admin_token
        self.session = session or requests.Session()
        self.session.headers.update(dict(DEFAULT_HEADERS))

    def _log(self, msg: str, *args: Any) -> None:
        logger.debug("[RequestsHttpClient] " + msg, *args)

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, *, params: Mapping[str, Any] | None = None, json: Any | None = None) -> HttpResponse:
        url = self._url(path)
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=auth_headers(method, self._admin_token),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("http_transport_failed method=%s path=%s error=%s", method, path, e)
            raise TransportError(str(e)) from e
        self._log("%s %s -> %s", method, url, resp.status_code)
        if resp.status_code >= 400:
            raise api_error_for(method, url, resp.status_code, resp.text)
        return HttpResponse(resp.status_code, resp.text, str(resp.url), resp.headers, raw=resp)

    def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> HttpResponse:
        return self._send("GET", path, params=params)

    def post(self, path: str, *, json: Any | None = None) -> HttpResponse:
        return self._send("POST", path, json=json)

    def patch(self, path: str, *, json: Any | None = None) -> HttpResponse:
        return self._send("PATCH", path, json=json)

    def delete(self, path: str) -> HttpResponse:
        return self._send("DELETE", path)

    def close(self) -> None:
        self.session.close()
