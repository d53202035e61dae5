from __future__ import annotations

import logging
from dataclasses import dataclass

from rental_storefront.application import messages
from rental_storefront.application.errors import CodeValidationError, StorefrontError
from rental_storefront.application.ports.code_validation_port import CodeValidationPort
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.domain.entities.code_access import CodeAccess

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RedeemResult:
    status: str  # "REDEEMED" | "ERROR"
    message: str | None = None
    access: CodeAccess | None = None


class RedeemCodeUseCase:
    """Validates a purchase code remotely and, on success, adds it to the session.

    Any failure leaves the session untouched.
    """

    def __init__(self, validator: CodeValidationPort, store: SessionStore) -> None:
        self.validator = validator
        self.store = store

    def execute(self, code: str, email: str) -> RedeemResult:
        code = (code or "").strip()
        email = (email or "").strip()
        if not code or not email:
            return RedeemResult("ERROR", messages.MISSING_CODE_OR_EMAIL)

        try:
            validation = self.validator.validate(code)
            if not validation.success:
                raise CodeValidationError(messages.CODE_REJECTED)
            access = self.store.add_code(code, email, validation)
        except CodeValidationError as exc:
            logger.info("code_rejected error=%s", exc.__cause__ or exc)
            return RedeemResult("ERROR", str(exc))
        except StorefrontError as exc:
            logger.warning("code_validation_failed error=%s", exc)
            return RedeemResult("ERROR", messages.describe_error(exc, messages.VALIDATION_FAILED))
        return RedeemResult("REDEEMED", None, access)
