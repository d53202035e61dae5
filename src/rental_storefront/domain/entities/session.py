from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from rental_storefront.domain.entities.code_access import CodeAccess
from rental_storefront.domain.entities.rental import RentalSession


@dataclass(frozen=True)
class Session:
    """Persisted aggregate: the active customer, redeemed codes and cached rentals."""

    customer_email: str | None = None
    codes: tuple[CodeAccess, ...] = ()
    rentals: Mapping[str, RentalSession] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only copy: changes must go through the store so they get persisted
        object.__setattr__(self, "rentals", MappingProxyType(dict(self.rentals)))

    @property
    def is_empty(self) -> bool:
        return self.customer_email is None and not self.codes and not self.rentals

    def find_code(self, code: str) -> CodeAccess | None:
        return next((c for c in self.codes if c.code == code), None)
