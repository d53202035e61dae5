from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rental_storefront.application import messages
from rental_storefront.domain.entities.code_access import CodeAccess


def format_time_remaining(expires_at: datetime | None, now: datetime) -> str:
    if expires_at is None:
        return messages.PERMANENT
    remaining = (expires_at - now).total_seconds()
    if remaining <= 0:
        return messages.EXPIRED
    minutes = int(remaining // 60)
    if minutes < 60:
        return f"{minutes} min"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h"
    return f"{hours // 24}j"


def describe_grant(grant_type: str, value: str) -> str:
    if grant_type == "time":
        return messages.FULL_ACCESS_LABEL
    if grant_type == "film":
        return messages.FILM_LABEL.format(value=value)
    if grant_type == "category":
        return messages.CATEGORY_LABEL.format(value=value)
    return value


@dataclass(frozen=True)
class CodeStatusDTO:
    code: str
    code_preview: str
    grant_type: str
    grant_value: str
    label: str
    expires_at: datetime | None
    expired: bool
    time_remaining: str

    @classmethod
    def from_domain(cls, access: CodeAccess, now: datetime) -> "CodeStatusDTO":
        grant = access.grant
        return cls(
            code=access.code,
            code_preview=f"{access.code[:8]}...",
            grant_type=grant.type,
            grant_value=grant.value,
            label=describe_grant(grant.type, grant.value),
            expires_at=grant.expires_at,
            expired=not grant.is_active(now),
            time_remaining=format_time_remaining(grant.expires_at, now),
        )
