from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from rental_storefront.domain.value_objects.timestamp import parse_timestamp


@dataclass(frozen=True)
class RentalSession:
    """Cached playback grant for one movie. The signed URL is disposable."""

    rental_id: str
    expires_at: datetime
    signed_url: str | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(frozen=True)
class Rental:
    id: str
    movie_id: str
    customer_email: str
    code: str
    status: str  # "active" | "expired"
    expires_at: datetime | None
    last_signed_url: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Rental":
        movie = payload.get("movie")
        if isinstance(movie, Mapping):
            movie_id = str(movie.get("_id") or movie.get("id") or "")
        else:
            movie_id = str(movie or "")
        return cls(
            id=str(payload.get("id") or payload.get("_id") or ""),
            movie_id=movie_id,
            customer_email=str(payload.get("customerEmail") or ""),
            code=str(payload.get("payhipCode") or ""),
            status=str(payload.get("status") or "active"),
            expires_at=parse_timestamp(payload.get("expiresAt")),
            last_signed_url=payload.get("lastSignedUrl") or None,
        )


@dataclass(frozen=True)
class RentalEnvelope:
    rental: Rental
    signed_url: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RentalEnvelope":
        rental = payload.get("rental")
        return cls(
            rental=Rental.from_payload(rental if isinstance(rental, Mapping) else {}),
            signed_url=payload.get("signedUrl") or None,
        )
