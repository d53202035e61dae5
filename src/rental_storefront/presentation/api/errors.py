from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from rental_storefront.application import messages
from rental_storefront.application.errors import AdminAuthError, ApiError, StorefrontError

logger = logging.getLogger(__name__)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    # Admin gate failures → 401, remote API failures → 502, anything else → 400
    if isinstance(exc, AdminAuthError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})
    if isinstance(exc, ApiError):
        logger.warning("upstream_error path=%s status=%s", request.url.path, exc.status_code)
        detail = messages.describe_error(exc, str(exc))
        return JSONResponse(status_code=502, content={"detail": detail})
    return JSONResponse(status_code=400, content={"detail": str(exc)})
