from typing import Any

from fastapi import APIRouter, Depends

from rental_storefront.bootstrap import Storefront
from rental_storefront.presentation.api.dependencies import get_storefront

router = APIRouter(tags=["health"])

@router.get("/health")
def health(storefront: Storefront = Depends(get_storefront)) -> dict[str, Any]:  # type: ignore[misc]
    catalog = storefront.catalog
    return {
        "status": "ok",
        "catalog_initialized": catalog.initialized,
        "catalog_error": catalog.error,
        "codes": len(storefront.session.codes),
    }
