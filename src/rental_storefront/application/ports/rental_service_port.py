from __future__ import annotations

from typing import Protocol

from rental_storefront.domain.entities.rental import RentalEnvelope


class RentalServicePort(Protocol):
    """Issues rentals and their signed playback URLs."""

    def create_rental(self, movie_id: str, customer_email: str, code: str) -> RentalEnvelope: ...
    def fetch_rental(self, rental_id: str) -> RentalEnvelope: ...
