from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from rental_storefront.application import messages
from rental_storefront.application.errors import StorefrontError
from rental_storefront.application.ports.clock_port import Clock, SystemClock
from rental_storefront.application.ports.rental_service_port import RentalServicePort
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.domain.entities.movie import Movie
from rental_storefront.domain.entities.rental import RentalSession
from rental_storefront.domain.value_objects.timestamp import END_OF_TIME, add_seconds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchResult:
    # "READY" | "NO_ACCESS" | "CODE_REQUIRED" | "NO_ELIGIBLE_CODE" | "IN_PROGRESS" | "NO_RENTAL" | "ERROR"
    status: str
    movie_id: str
    signed_url: str | None = None
    message: str | None = None
    rental: RentalSession | None = None

    @property
    def ok(self) -> bool:
        return self.status == "READY"


class WatchMovieUseCase:
    """Requests a rental (and its signed URL) for a movie the viewer may watch.

    Requests are serialized per movie id: while one is pending for a movie, a
    second one returns IN_PROGRESS instead of creating another rental.
    Failures never touch the cached rentals and are not retried.
    """

    def __init__(self, store: SessionStore, rentals: RentalServicePort, *, clock: Clock | None = None) -> None:
        self.store = store
        self.rentals = rentals
        self.clock = clock or SystemClock()
        self._in_flight: set[str] = set()
        self._lock = threading.Lock()

    def execute(self, movie: Movie) -> WatchResult:
        if not self.store.has_access(movie.id, movie.category):
            return WatchResult("NO_ACCESS", movie.id, message=messages.NO_ACCESS)

        email = self.store.customer_email
        if not email or not self.store.codes:
            return WatchResult("CODE_REQUIRED", movie.id, message=messages.CODE_REQUIRED)

        eligible = self.store.select_code_for(movie.id, movie.category)
        if eligible is None:
            return WatchResult("NO_ELIGIBLE_CODE", movie.id, message=messages.NO_ELIGIBLE_CODE)

        with self._lock:
            if movie.id in self._in_flight:
                logger.info("watch_skipped movie_id=%s reason=in_flight", movie.id)
                return WatchResult("IN_PROGRESS", movie.id, message=messages.WATCH_IN_PROGRESS)
            self._in_flight.add(movie.id)
        try:
            return self._issue(movie, email, eligible.code)
        finally:
            with self._lock:
                self._in_flight.discard(movie.id)

    def is_pending(self, movie_id: str) -> bool:
        with self._lock:
            return movie_id in self._in_flight

    def _issue(self, movie: Movie, email: str, code: str) -> WatchResult:
        try:
            envelope = self.rentals.create_rental(movie.id, email, code)
        except StorefrontError as exc:
            logger.warning("rental_issue_failed movie_id=%s error=%s", movie.id, exc)
            return WatchResult("ERROR", movie.id, message=messages.describe_error(exc, messages.VIDEO_LOAD_FAILED))

        if not envelope.signed_url:
            return WatchResult("ERROR", movie.id, message=messages.SIGNED_URL_UNAVAILABLE)
        if not envelope.rental.id:
            return WatchResult("ERROR", movie.id, message=messages.RENTAL_NOT_FOUND)

        expires_at = envelope.rental.expires_at
        if expires_at is None:
            expires_at = add_seconds(self.clock.now(), movie.rental_duration_hours * 3600) or END_OF_TIME
        rental = RentalSession(rental_id=envelope.rental.id, expires_at=expires_at, signed_url=envelope.signed_url)
        self.store.upsert_rental(movie.id, rental)
        logger.info("rental_issued movie_id=%s rental_id=%s", movie.id, rental.rental_id)
        return WatchResult("READY", movie.id, signed_url=rental.signed_url, rental=rental)
