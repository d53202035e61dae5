from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from urllib.parse import quote

from rental_storefront.application.ports.catalog_service_port import CategoryCatalogPort, MovieCatalogPort
from rental_storefront.application.ports.http_client_port import HttpClientPort
from rental_storefront.domain.entities.movie import Category, Movie, PublicPreview
from rental_storefront.infrastructure.adapters.api.envelope import unwrap_list, unwrap_mapping


class MoviesAdapter(MovieCatalogPort):
    def __init__(self, http: HttpClientPort) -> None:
        self.http = http

    def list_movies(self) -> Sequence[Movie]:
        return [Movie.from_payload(m) for m in unwrap_list(self.http.get("/api/movies"))]

    def list_free_previews(self) -> Sequence[Movie]:
        return [Movie.from_payload(m) for m in unwrap_list(self.http.get("/api/movies/free-previews"))]

    def list_public_previews(self) -> Sequence[PublicPreview]:
        # Served straight from the public video library, not from the catalog database.
        return [PublicPreview.from_payload(p) for p in unwrap_list(self.http.get("/api/public/previews"))]

    def update_movie(self, movie_id: str, updates: dict[str, Any]) -> Movie:
        resp = self.http.patch(f"/api/movies/{quote(movie_id, safe='')}", json=updates)
        return Movie.from_payload(unwrap_mapping(resp))


class CategoriesAdapter(CategoryCatalogPort):
    def __init__(self, http: HttpClientPort) -> None:
        self.http = http

    def list_categories(self) -> Sequence[Category]:
        return [Category.from_payload(c) for c in unwrap_list(self.http.get("/api/categories"))]

    def create_category(self, slug: str, label: str, order: int | None = None) -> Category:
        body: dict[str, Any] = {"slug": slug, "label": label}
        if order is not None:
            body["order"] = order
        return Category.from_payload(unwrap_mapping(self.http.post("/api/categories", json=body)))

    def update_category(
        self, slug: str, *, label: str | None = None, order: int | None = None, new_slug: str | None = None
    ) -> Category:
        body: dict[str, Any] = {}
        if label is not None:
            body["label"] = label
        if order is not None:
            body["order"] = order
        if new_slug is not None:
            body["newSlug"] = new_slug
        resp = self.http.patch(f"/api/categories/{quote(slug, safe='')}", json=body)
        return Category.from_payload(unwrap_mapping(resp))

    def delete_category(self, slug: str) -> None:
        self.http.delete(f"/api/categories/{quote(slug, safe='')}")
