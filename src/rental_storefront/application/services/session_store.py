from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import replace

from rental_storefront.application import messages
from rental_storefront.application.dtos.code_status_dto import CodeStatusDTO
from rental_storefront.application.errors import CodeValidationError
from rental_storefront.application.ports.clock_port import Clock, SystemClock
from rental_storefront.application.ports.session_persistence_port import SessionPersistencePort
from rental_storefront.domain.entities.access_grant import AccessGrant
from rental_storefront.domain.entities.code_access import CodeAccess
from rental_storefront.domain.entities.code_validation import CodeValidation
from rental_storefront.domain.entities.rental import RentalSession
from rental_storefront.domain.entities.session import Session
from rental_storefront.domain.services.access_policy import (
    active_grants,
    derive_grant,
    has_access,
    select_code_for,
)
from rental_storefront.domain.services.session_sanitizer import (
    GrantFallback,
    sanitize_session,
    session_to_payload,
)
from rental_storefront.domain.value_objects.purchase_code import PurchaseCode

SessionListener = Callable[[Session], None]

logger = logging.getLogger(__name__)


class SessionStore:
    """State container for redeemed codes, their grants and cached rentals.

    The aggregate is loaded (and sanitized) once from the injected persistence.
    Every mutation writes the new aggregate first and only then swaps it in
    memory, so a failed write leaves the store exactly as it was.
    Expiry is always judged against the clock at query time.
    """

    def __init__(
        self,
        persistence: SessionPersistencePort,
        *,
        clock: Clock | None = None,
        fallback: GrantFallback = "permissive",
    ) -> None:
        self._persistence = persistence
        self._clock = clock or SystemClock()
        self._lock = threading.RLock()
        self._listeners: list[SessionListener] = []
        self._session = sanitize_session(persistence.read(), now=self._clock.now(), fallback=fallback)
        logger.info(
            "session_loaded codes=%s rentals=%s",
            len(self._session.codes),
            len(self._session.rentals),
        )

    # ----- reads -----

    def snapshot(self) -> Session:
        # frozen, with a read-only rentals view
        return self._session

    @property
    def customer_email(self) -> str | None:
        return self._session.customer_email

    @property
    def codes(self) -> tuple[CodeAccess, ...]:
        return self._session.codes

    def rental_for(self, movie_id: str) -> RentalSession | None:
        return self._session.rentals.get(movie_id)

    def get_active_access(self) -> list[AccessGrant]:
        return active_grants(self._session.codes, self._clock.now())

    def has_access(self, movie_id: str, category: str | None = None) -> bool:
        return has_access(self.get_active_access(), movie_id, category)

    def select_code_for(self, movie_id: str, category: str | None = None) -> CodeAccess | None:
        return select_code_for(self._session.codes, movie_id, category, self._clock.now())

    def codes_with_status(self) -> list[CodeStatusDTO]:
        now = self._clock.now()
        return [CodeStatusDTO.from_domain(c, now) for c in self._session.codes]

    # ----- mutations -----

    def add_code(self, code: str, email: str, validation: CodeValidation) -> CodeAccess:
        """Stores a validated code, replacing any entry with the same code.

        Raises CodeValidationError when the code is blank or its grant unusable.
        """
        now = self._clock.now()
        try:
            access = CodeAccess(
                code=str(PurchaseCode(code)),
                email=email.strip(),
                validation=validation,
                grant=derive_grant(validation, now),
                added_at=now,
            )
        except ValueError as exc:
            raise CodeValidationError(messages.CODE_REJECTED) from exc
        with self._lock:
            current = self._session
            codes = tuple(c for c in current.codes if c.code != access.code) + (access,)
            session = self._commit(replace(current, customer_email=access.email or None, codes=codes))
        logger.info("session_code_added type=%s permanent=%s", access.grant.type, access.grant.is_permanent)
        self._notify(session)
        return access

    def remove_code(self, code: str) -> bool:
        code = code.strip()
        with self._lock:
            current = self._session
            codes = tuple(c for c in current.codes if c.code != code)
            if len(codes) == len(current.codes):
                return False
            session = self._commit(replace(current, codes=codes))
        logger.info("session_code_removed codes=%s", len(codes))
        self._notify(session)
        return True

    def upsert_rental(self, movie_id: str, rental: RentalSession) -> None:
        with self._lock:
            current = self._session
            rentals = dict(current.rentals)
            rentals[movie_id] = rental
            session = self._commit(replace(current, rentals=rentals))
        self._notify(session)

    def clear_session(self) -> None:
        with self._lock:
            session = self._commit(Session())
        logger.info("session_cleared")
        self._notify(session)

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Registers a listener called with the new aggregate after each mutation."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, session: Session) -> Session:
        self._persistence.write(session_to_payload(session))
        self._session = session
        return session

    def _notify(self, session: Session) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(session)
