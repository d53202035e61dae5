from __future__ import annotations

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from rental_storefront.application.errors import StorefrontError
from rental_storefront.bootstrap import Storefront, build_storefront
from rental_storefront.config import configure_logging
from rental_storefront.presentation.api.errors import storefront_error_handler
from rental_storefront.presentation.api.metrics import registry
from rental_storefront.presentation.api.routes.admin import router as admin_router
from rental_storefront.presentation.api.routes.assistant import router as assistant_router
from rental_storefront.presentation.api.routes.catalog import router as catalog_router
from rental_storefront.presentation.api.routes.health import router as health_router
from rental_storefront.presentation.api.routes.session import router as session_router


def create_app(storefront: Storefront | None = None) -> FastAPI:
    if storefront is None:
        configure_logging()
        storefront = build_storefront()

    app = FastAPI(title="Rental Storefront", version="0.1.0")
    app.state.storefront = storefront
    app.add_exception_handler(StorefrontError, storefront_error_handler)  # type: ignore[arg-type]
    app.include_router(health_router)
    app.include_router(session_router)
    app.include_router(catalog_router)
    app.include_router(assistant_router)
    app.include_router(admin_router)

    @app.get("/metrics")
    def metrics() -> Response:  # type: ignore[misc]
        data = generate_latest(registry)
        return Response(content=data, media_type=CONTENT_TYPE_LATEST)

    return app
