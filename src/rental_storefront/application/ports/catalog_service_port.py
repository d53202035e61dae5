from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from rental_storefront.domain.entities.movie import Category, Movie, PublicPreview


class MovieCatalogPort(Protocol):
    def list_movies(self) -> Sequence[Movie]: ...
    def list_free_previews(self) -> Sequence[Movie]: ...
    def list_public_previews(self) -> Sequence[PublicPreview]: ...
    def update_movie(self, movie_id: str, updates: dict[str, Any]) -> Movie: ...


class CategoryCatalogPort(Protocol):
    def list_categories(self) -> Sequence[Category]: ...
    def create_category(self, slug: str, label: str, order: int | None = None) -> Category: ...
    def update_category(
        self, slug: str, *, label: str | None = None, order: int | None = None, new_slug: str | None = None
    ) -> Category: ...
    def delete_category(self, slug: str) -> None: ...
