from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from rental_storefront.domain.value_objects.access_type import FULL_ACCESS, AccessType


@dataclass(frozen=True)
class AccessGrant:
    """What a redeemed code unlocks: everything, one film or one category.

    A grant without ``expires_at`` is permanent.
    """

    type: AccessType
    value: str
    expires_at: datetime | None = None

    @classmethod
    def full_access(cls, expires_at: datetime | None = None) -> "AccessGrant":
        return cls("time", FULL_ACCESS, expires_at)

    @property
    def is_permanent(self) -> bool:
        return self.expires_at is None

    def is_active(self, now: datetime) -> bool:
        return self.expires_at is None or self.expires_at > now

    def covers(self, movie_id: str, category: str | None = None) -> bool:
        if self.type == "time":
            return self.value == FULL_ACCESS
        if self.type == "film":
            return self.value == movie_id
        if self.type == "category":
            return category is not None and self.value == category
        return False
