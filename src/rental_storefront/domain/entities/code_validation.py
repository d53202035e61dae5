from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _opt_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _opt_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


@dataclass(frozen=True)
class CodeValidation:
    """Server verdict on a purchase code, kept verbatim in ``raw``."""

    success: bool
    license_key: str
    product_id: str | None = None
    email: str | None = None
    status: str | None = None
    order_id: str | None = None
    purchased_at: str | None = None
    access_type: str | None = None
    access_value: str | None = None
    duration: float | None = None  # seconds
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "CodeValidation":
        data = dict(payload or {})
        return cls(
            success=data.get("success") is True,
            license_key=_opt_str(data.get("licenseKey")) or "",
            product_id=_opt_str(data.get("productId")),
            email=_opt_str(data.get("email")),
            status=_opt_str(data.get("status")),
            order_id=_opt_str(data.get("orderId")),
            purchased_at=_opt_str(data.get("purchasedAt")),
            access_type=_opt_str(data.get("accessType")),
            access_value=_opt_str(data.get("accessValue")),
            duration=_opt_number(data.get("duration")),
            raw=data,
        )

    @classmethod
    def legacy(cls, code: str) -> "CodeValidation":
        """Stand-in for codes persisted before validations were stored alongside them."""
        return cls.from_payload({"success": True, "licenseKey": code})

    def to_payload(self) -> dict[str, Any]:
        return dict(self.raw)
