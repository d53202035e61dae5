from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from rental_storefront.domain.entities.access_grant import AccessGrant
from rental_storefront.domain.entities.code_access import CodeAccess
from rental_storefront.domain.entities.code_validation import CodeValidation
from rental_storefront.domain.value_objects.access_type import is_access_type
from rental_storefront.domain.value_objects.timestamp import add_seconds

# narrowest grant first when several codes cover the same movie
_SELECTION_ORDER = {"film": 0, "category": 1, "time": 2}


def derive_grant(validation: CodeValidation, now: datetime) -> AccessGrant:
    """Builds the grant a validated code unlocks.

    Unknown access types fall back to full access; a positive ``duration`` (seconds)
    becomes an absolute expiry, or none at all when it lies past the calendar's end.
    Film and category grants need an ``accessValue``.
    """
    expires_at = None
    if validation.duration is not None and validation.duration > 0:
        expires_at = add_seconds(now, validation.duration)

    if not is_access_type(validation.access_type) or validation.access_type == "time":
        return AccessGrant.full_access(expires_at)

    if not validation.access_value:
        raise ValueError(f"accessValue is required for {validation.access_type} codes")
    return AccessGrant(validation.access_type, validation.access_value, expires_at)  # type: ignore[arg-type]


def active_grants(codes: Iterable[CodeAccess], now: datetime) -> list[AccessGrant]:
    return [c.grant for c in codes if c.grant.is_active(now)]


def has_access(grants: Iterable[AccessGrant], movie_id: str, category: str | None = None) -> bool:
    return any(g.covers(movie_id, category) for g in grants)


def select_code_for(
    codes: Sequence[CodeAccess], movie_id: str, category: str | None, now: datetime
) -> CodeAccess | None:
    """Picks the redeemed code to present for a rental request.

    Only successfully validated, unexpired codes whose grant covers the movie are
    eligible; among them film grants win over category grants over full access.
    """
    eligible = [
        c
        for c in codes
        if c.validation.success and c.grant.is_active(now) and c.grant.covers(movie_id, category)
    ]
    if not eligible:
        return None
    return min(eligible, key=lambda c: _SELECTION_ORDER.get(c.grant.type, len(_SELECTION_ORDER)))
