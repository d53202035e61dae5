from __future__ import annotations

from rental_storefront.application.dtos.catalog_view_dto import CatalogViewDTO, CategoryGroupDTO
from rental_storefront.application.services.catalog_store import CatalogStore
from rental_storefront.application.services.session_store import SessionStore

RECENT_LIMIT = 10


class BrowseCatalogUseCase:
    """Builds the catalog as the viewer may see it: only movies their grants cover."""

    def __init__(self, catalog: CatalogStore, store: SessionStore) -> None:
        self.catalog = catalog
        self.store = store

    def execute(self, category: str | None = None) -> CatalogViewDTO:
        self.catalog.ensure_loaded()
        visible = [m for m in self.catalog.movies if self.store.has_access(m.id, m.category)]
        if category:
            visible = [m for m in visible if m.category == category]

        groups = []
        for cat in self.catalog.categories:
            movies = tuple(m for m in visible if m.category == cat.slug)
            if movies:
                groups.append(CategoryGroupDTO(slug=cat.slug, label=cat.label, movies=movies))

        return CatalogViewDTO(
            recent=tuple(visible[:RECENT_LIMIT]),
            groups=tuple(groups),
            loading=self.catalog.loading,
            error=self.catalog.error,
        )
