from __future__ import annotations

from rental_storefront.application.ports.code_validation_port import CodeValidationPort
from rental_storefront.application.ports.http_client_port import HttpClientPort
from rental_storefront.domain.entities.code_validation import CodeValidation
from rental_storefront.infrastructure.adapters.api.envelope import unwrap_mapping


class PayhipValidationAdapter(CodeValidationPort):
    """Validates purchase codes against POST /api/payhip/validate."""

    def __init__(self, http: HttpClientPort) -> None:
        self.http = http

    def validate(self, code: str) -> CodeValidation:
        resp = self.http.post("/api/payhip/validate", json={"code": code})
        return CodeValidation.from_payload(unwrap_mapping(resp))
