from __future__ import annotations

from fastapi import Depends, Header, Request

from rental_storefront.application.use_cases.manage_catalog import ManageCatalogUseCase
from rental_storefront.bootstrap import Storefront


def get_storefront(request: Request) -> Storefront:
    return request.app.state.storefront


def get_admin_catalog(
    authorization: str | None = Header(default=None),
    storefront: Storefront = Depends(get_storefront),
) -> ManageCatalogUseCase:
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[7:].strip()
    return storefront.manage.with_credentials(token)
