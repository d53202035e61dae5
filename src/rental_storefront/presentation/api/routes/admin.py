from __future__ import annotations

from fastapi import APIRouter, Depends

from rental_storefront.application.use_cases.manage_catalog import ManageCatalogUseCase
from rental_storefront.presentation.api.dependencies import get_admin_catalog
from rental_storefront.presentation.api.schemas import (
    CategoryIn,
    CategoryOut,
    CategoryUpdateIn,
    MovieOut,
    MovieUpdateIn,
)

router = APIRouter(prefix="/v1/admin", tags=["admin"])


@router.get("/categories", response_model=list[CategoryOut])
def list_categories(uc: ManageCatalogUseCase = Depends(get_admin_catalog)) -> list[CategoryOut]:
    return [CategoryOut.model_validate(c) for c in uc.list_categories()]


@router.post("/categories", response_model=CategoryOut)
def create_category(body: CategoryIn, uc: ManageCatalogUseCase = Depends(get_admin_catalog)) -> CategoryOut:
    return CategoryOut.model_validate(uc.create_category(body.slug, body.label, body.order))


@router.patch("/categories/{slug}", response_model=CategoryOut)
def update_category(
    slug: str, body: CategoryUpdateIn, uc: ManageCatalogUseCase = Depends(get_admin_catalog)
) -> CategoryOut:
    category = uc.update_category(slug, label=body.label, order=body.order, new_slug=body.new_slug)
    return CategoryOut.model_validate(category)


@router.delete("/categories/{slug}")
def delete_category(slug: str, uc: ManageCatalogUseCase = Depends(get_admin_catalog)) -> dict[str, str]:
    uc.delete_category(slug)
    return {"deleted": slug}


@router.patch("/movies/{movie_id}", response_model=MovieOut)
def update_movie(
    movie_id: str, body: MovieUpdateIn, uc: ManageCatalogUseCase = Depends(get_admin_catalog)
) -> MovieOut:
    movie = uc.update_movie(
        movie_id,
        category=body.category,
        title=body.title,
        is_free_preview=body.is_free_preview,
        tags=body.tags,
    )
    return MovieOut.model_validate(movie)
