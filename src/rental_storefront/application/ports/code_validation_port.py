from __future__ import annotations

from typing import Protocol

from rental_storefront.domain.entities.code_validation import CodeValidation


class CodeValidationPort(Protocol):
    """Remote purchase-code validation service."""

    def validate(self, code: str) -> CodeValidation: ...
