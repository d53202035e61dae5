from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rental_storefront.application.errors import ApiError
from rental_storefront.application.ports.http_client_port import HttpResponse


def _body(response: HttpResponse) -> Any:
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(f"Invalid JSON from {response.url}", status_code=response.status_code) from exc


def unwrap(response: HttpResponse) -> Any:
    """Returns the ``data`` member of the API's ``{data, message?}`` envelope."""
    body = _body(response)
    if not isinstance(body, Mapping) or "data" not in body:
        raise ApiError(f"Unexpected payload from {response.url}", status_code=response.status_code)
    return body["data"]


def unwrap_mapping(response: HttpResponse) -> Mapping[str, Any]:
    data = unwrap(response)
    if not isinstance(data, Mapping):
        raise ApiError(f"Expected an object from {response.url}", status_code=response.status_code)
    return data


def unwrap_list(response: HttpResponse) -> list[Mapping[str, Any]]:
    data = unwrap(response)
    if not isinstance(data, list):
        raise ApiError(f"Expected a list from {response.url}", status_code=response.status_code)
    return [item for item in data if isinstance(item, Mapping)]
