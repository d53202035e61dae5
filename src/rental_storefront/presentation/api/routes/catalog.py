from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from rental_storefront.application.use_cases.watch_movie import WatchResult
from rental_storefront.bootstrap import Storefront
from rental_storefront.presentation.api.dependencies import get_storefront
from rental_storefront.presentation.api.metrics import WATCH_REQUESTS
from rental_storefront.presentation.api.schemas import (
    CatalogOut,
    MovieOut,
    PreviewingIn,
    PublicPreviewOut,
    WatchOut,
)

router = APIRouter(prefix="/v1/catalog", tags=["catalog"])

_WATCH_STATUS_CODES = {
    "READY": 200,
    "NO_ACCESS": 403,
    "NO_ELIGIBLE_CODE": 403,
    "CODE_REQUIRED": 401,
    "NO_RENTAL": 404,
    "IN_PROGRESS": 409,
    "ERROR": 502,
}


def _watch_response(result: WatchResult) -> JSONResponse:
    WATCH_REQUESTS.labels(status=result.status).inc()
    body = WatchOut(
        status=result.status,
        movie_id=result.movie_id,
        signed_url=result.signed_url,
        message=result.message,
    )
    return JSONResponse(status_code=_WATCH_STATUS_CODES.get(result.status, 500), content=body.model_dump())


@router.get("", response_model=CatalogOut)
def browse(category: str | None = None, storefront: Storefront = Depends(get_storefront)) -> CatalogOut:
    return CatalogOut.model_validate(storefront.browse.execute(category))


@router.post("/refresh")
def refresh(storefront: Storefront = Depends(get_storefront)) -> dict[str, Any]:
    started = storefront.catalog.fetch_catalog()
    storefront.catalog.fetch_categories()
    return {"started": started, "movies": len(storefront.catalog.movies), "error": storefront.catalog.error}


@router.get("/previews/free", response_model=list[MovieOut])
def free_previews(storefront: Storefront = Depends(get_storefront)) -> list[MovieOut]:
    return [MovieOut.model_validate(m) for m in storefront.movies.list_free_previews()]


@router.get("/previews/public", response_model=list[PublicPreviewOut])
def public_previews(storefront: Storefront = Depends(get_storefront)) -> list[PublicPreviewOut]:
    return [PublicPreviewOut.model_validate(p) for p in storefront.movies.list_public_previews()]


@router.put("/previewing")
def set_previewing(body: PreviewingIn, storefront: Storefront = Depends(get_storefront)) -> dict[str, str | None]:
    storefront.catalog.set_previewing(body.movie_id)
    return {"previewing_id": storefront.catalog.previewing_id}


@router.post("/{movie_id}/watch", response_model=WatchOut)
def watch(movie_id: str, storefront: Storefront = Depends(get_storefront)) -> JSONResponse:
    storefront.catalog.ensure_loaded()
    movie = storefront.catalog.get_movie(movie_id)
    if movie is None:
        raise HTTPException(status_code=404, detail="Movie not found")
    return _watch_response(storefront.watch.execute(movie))


@router.post("/{movie_id}/resume", response_model=WatchOut)
def resume(movie_id: str, storefront: Storefront = Depends(get_storefront)) -> JSONResponse:
    return _watch_response(storefront.resume.execute(movie_id))
