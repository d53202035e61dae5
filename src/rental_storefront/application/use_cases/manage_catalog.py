from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rental_storefront.application.ports.catalog_service_port import CategoryCatalogPort, MovieCatalogPort
from rental_storefront.application.services.admin_gate import AdminGate
from rental_storefront.application.services.catalog_store import CatalogStore
from rental_storefront.domain.entities.movie import Category, Movie


class ManageCatalogUseCase:
    """Admin-only category and movie edits. Refreshes the cached catalog afterwards.

    Raises ``AdminAuthError`` without an admin login; remote failures propagate.
    """

    def __init__(
        self,
        gate: AdminGate,
        movies: MovieCatalogPort,
        categories: CategoryCatalogPort,
        catalog: CatalogStore,
    ) -> None:
        self.gate = gate
        self.movies = movies
        self.categories = categories
        self.catalog = catalog

    def with_credentials(self, password: str | None) -> "ManageCatalogUseCase":
        """Copy bound to a gate logged in with ``password``; raises AdminAuthError otherwise."""
        gate = self.gate.fork()
        gate.login(password or "")
        return ManageCatalogUseCase(gate, self.movies, self.categories, self.catalog)

    def list_categories(self) -> Sequence[Category]:
        return self.categories.list_categories()

    def create_category(self, slug: str, label: str, order: int | None = None) -> Category:
        self.gate.require()
        category = self.categories.create_category(slug, label, order)
        self.catalog.fetch_categories()
        return category

    def update_category(
        self, slug: str, *, label: str | None = None, order: int | None = None, new_slug: str | None = None
    ) -> Category:
        self.gate.require()
        category = self.categories.update_category(slug, label=label, order=order, new_slug=new_slug)
        self.catalog.fetch_categories()
        return category

    def delete_category(self, slug: str) -> None:
        self.gate.require()
        self.categories.delete_category(slug)
        self.catalog.fetch_categories()

    def update_movie(self, movie_id: str, **updates: Any) -> Movie:
        self.gate.require()
        payload = {_MOVIE_FIELDS[k]: v for k, v in updates.items() if k in _MOVIE_FIELDS and v is not None}
        movie = self.movies.update_movie(movie_id, payload)
        self.catalog.fetch_catalog()
        return movie


_MOVIE_FIELDS = {
    "category": "category",
    "title": "title",
    "is_free_preview": "isFreePreview",
    "tags": "tags",
}
