from __future__ import annotations

import hmac
import logging

from rental_storefront.application import messages
from rental_storefront.application.errors import AdminAuthError

logger = logging.getLogger(__name__)


class AdminGate:
    """Password gate in front of catalog administration."""

    def __init__(self, admin_password: str | None) -> None:
        self._password = admin_password or None
        self._authenticated = False

    @property
    def configured(self) -> bool:
        return self._password is not None

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    def check(self, password: str | None) -> bool:
        if self._password is None or not password:
            return False
        return hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))

    def login(self, password: str) -> None:
        if not self.check(password):
            logger.warning("admin_login_failed")
            raise AdminAuthError(messages.WRONG_ADMIN_PASSWORD)
        self._authenticated = True
        logger.info("admin_login_succeeded")

    def logout(self) -> None:
        self._authenticated = False

    def require(self) -> None:
        if not self._authenticated:
            raise AdminAuthError(messages.ADMIN_REQUIRED)

    def fork(self) -> "AdminGate":
        """Fresh, unauthenticated gate sharing the same password (one per request)."""
        return AdminGate(self._password)
