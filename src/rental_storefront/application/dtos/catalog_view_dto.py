from __future__ import annotations

from dataclasses import dataclass

from rental_storefront.domain.entities.movie import Movie


@dataclass(frozen=True)
class CategoryGroupDTO:
    slug: str
    label: str
    movies: tuple[Movie, ...]


@dataclass(frozen=True)
class CatalogViewDTO:
    recent: tuple[Movie, ...]
    groups: tuple[CategoryGroupDTO, ...]
    loading: bool = False
    error: str | None = None
