from __future__ import annotations

from urllib.parse import quote

from rental_storefront.application.ports.http_client_port import HttpClientPort
from rental_storefront.application.ports.rental_service_port import RentalServicePort
from rental_storefront.domain.entities.rental import RentalEnvelope
from rental_storefront.infrastructure.adapters.api.envelope import unwrap_mapping


class RentalsAdapter(RentalServicePort):
    def __init__(self, http: HttpClientPort) -> None:
        self.http = http

    def create_rental(self, movie_id: str, customer_email: str, code: str) -> RentalEnvelope:
        # The server creates or reuses the rental and always returns a fresh signed URL.
        resp = self.http.post(
            "/api/rentals",
            json={"movieId": movie_id, "customerEmail": customer_email, "payhipCode": code},
        )
        return RentalEnvelope.from_payload(unwrap_mapping(resp))

    def fetch_rental(self, rental_id: str) -> RentalEnvelope:
        resp = self.http.get(f"/api/rentals/{quote(rental_id, safe='')}")
        return RentalEnvelope.from_payload(unwrap_mapping(resp))
