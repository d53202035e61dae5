from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from rental_storefront.application.errors import TransportError
from rental_storefront.application.ports.http_client_port import HttpClientPort, HttpResponse
from rental_storefront.infrastructure.adapters.http.common import DEFAULT_HEADERS, api_error_for, auth_headers

logger = logging.getLogger(__name__)


class HttpxClient(HttpClientPort):
    def __init__(
        self,
        base_url: str,
        timeout: float = 12.0,
        *,
        admin_token: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """HTTP client adapter backed by a persistent httpx.Client.

        - Resolves every path against the storefront API base URL
        - Adds the admin bearer token to mutating requests when configured
        - Maps transport failures to TransportError and 4xx/5xx answers to ApiError

        Args:
            base_url (str): Storefront API base URL.
            timeout (float, optional): Timeout for requests. Defaults to 12.0.
            admin_token (str | None, optional): Admin password sent as bearer token.
            transport (httpx.BaseTransport | None, optional): Custom transport (tests).
        """
        self._admin_token = admin_token
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers=dict(DEFAULT_HEADERS),
            transport=transport,
        )

    def _log(self, msg: str, *args: Any) -> None:
        logger.debug("[HttpxClient] " + msg, *args)

    def _send(self, method: str, path: str, *, params: Mapping[str, Any] | None = None, json: Any | None = None) -> HttpResponse:
        try:
            resp = self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers=auth_headers(method, self._admin_token),
            )
        except httpx.HTTPError as e:
            logger.warning("http_transport_failed method=%s path=%s error=%s", method, path, e)
            raise TransportError(str(e)) from e
        self._log("%s %s -> %s", method, path, resp.status_code)
        if resp.status_code >= 400:
            raise api_error_for(method, str(resp.url), resp.status_code, resp.text)
        return HttpResponse(resp.status_code, resp.text, str(resp.url), resp.headers, raw=resp)

    def get(self, path: str, *, params: Mapping[str, Any] | None = None) -> HttpResponse:
        """Gets the given path.

        Args:
            path (str): Path relative to the base URL.
            params (Mapping[str, Any] | None, optional): Query parameters. Defaults to None.

        Returns:
            HttpResponse: Response from the server.
        """
        return self._send("GET", path, params=params)

    def post(self, path: str, *, json: Any | None = None) -> HttpResponse:
        """Posts a JSON body to the given path.

        Args:
            path (str): Path relative to the base URL.
            json (Any | None, optional): JSON-serializable body. Defaults to None.

        Returns:
            HttpResponse: Response from the server.
        """
        return self._send("POST", path, json=json)

    def patch(self, path: str, *, json: Any | None = None) -> HttpResponse:
        return self._send("PATCH", path, json=json)

    def delete(self, path: str) -> HttpResponse:
        return self._send("DELETE", path)

    def close(self) -> None:
        self._client.close()
