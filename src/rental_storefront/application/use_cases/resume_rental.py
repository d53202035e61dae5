from __future__ import annotations

import logging

from rental_storefront.application import messages
from rental_storefront.application.errors import StorefrontError
from rental_storefront.application.ports.clock_port import Clock, SystemClock
from rental_storefront.application.ports.rental_service_port import RentalServicePort
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.application.use_cases.watch_movie import WatchResult
from rental_storefront.domain.entities.rental import RentalSession

logger = logging.getLogger(__name__)


class ResumeRentalUseCase:
    """Plays from a cached rental, re-fetching its signed URL when it is missing."""

    def __init__(self, store: SessionStore, rentals: RentalServicePort, *, clock: Clock | None = None) -> None:
        self.store = store
        self.rentals = rentals
        self.clock = clock or SystemClock()

    def execute(self, movie_id: str) -> WatchResult:
        cached = self.store.rental_for(movie_id)
        if cached is None or cached.is_expired(self.clock.now()):
            return WatchResult("NO_RENTAL", movie_id, message=messages.NO_CACHED_RENTAL)
        if cached.signed_url:
            return WatchResult("READY", movie_id, signed_url=cached.signed_url, rental=cached)

        try:
            envelope = self.rentals.fetch_rental(cached.rental_id)
        except StorefrontError as exc:
            logger.warning("rental_refresh_failed movie_id=%s error=%s", movie_id, exc)
            return WatchResult("ERROR", movie_id, message=messages.describe_error(exc, messages.VIDEO_LOAD_FAILED))
        if not envelope.signed_url:
            return WatchResult("ERROR", movie_id, message=messages.SIGNED_URL_UNAVAILABLE)

        rental = RentalSession(
            rental_id=cached.rental_id,
            expires_at=envelope.rental.expires_at or cached.expires_at,
            signed_url=envelope.signed_url,
        )
        self.store.upsert_rental(movie_id, rental)
        return WatchResult("READY", movie_id, signed_url=rental.signed_url, rental=rental)
