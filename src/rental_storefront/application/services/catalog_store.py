from __future__ import annotations

import logging
import threading

from rental_storefront.application import messages
from rental_storefront.application.errors import StorefrontError
from rental_storefront.application.ports.catalog_service_port import CategoryCatalogPort, MovieCatalogPort
from rental_storefront.domain.entities.movie import Category, Movie

logger = logging.getLogger(__name__)


class CatalogStore:
    """In-memory cache of the movie list and categories, fetched once per session."""

    def __init__(self, movies: MovieCatalogPort, categories: CategoryCatalogPort) -> None:
        self._movies_api = movies
        self._categories_api = categories
        self._lock = threading.Lock()
        self.movies: tuple[Movie, ...] = ()
        self.categories: tuple[Category, ...] = ()
        self.loading = False
        self.error: str | None = None
        self.initialized = False
        self.previewing_id: str | None = None

    def fetch_catalog(self) -> bool:
        """Loads the movie list. Returns False when a fetch is already in flight."""
        with self._lock:
            if self.loading:
                logger.debug("catalog_fetch_skipped reason=in_flight")
                return False
            self.loading = True
            self.error = None
        try:
            movies = tuple(self._movies_api.list_movies())
        except StorefrontError as exc:
            with self._lock:
                self.error = str(exc) or messages.CATALOG_LOAD_FAILED
            logger.warning("catalog_fetch_failed error=%s", exc)
        else:
            with self._lock:
                self.movies = movies
                self.initialized = True
            logger.info("catalog_fetched movies=%s", len(movies))
        finally:
            with self._lock:
                self.loading = False
        return True

    def ensure_loaded(self) -> None:
        if not self.movies:
            self.fetch_catalog()
        if not self.categories:
            self.fetch_categories()

    def fetch_categories(self) -> None:
        try:
            categories = self._categories_api.list_categories()
        except StorefrontError as exc:
            logger.warning("categories_fetch_failed error=%s", exc)
            return
        self.categories = tuple(sorted(categories, key=lambda c: c.order))
        logger.info("categories_fetched count=%s", len(self.categories))

    def set_previewing(self, movie_id: str | None) -> None:
        self.previewing_id = movie_id

    def get_movie(self, movie_id: str) -> Movie | None:
        return next((m for m in self.movies if m.id == movie_id), None)
