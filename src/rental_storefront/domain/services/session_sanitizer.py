from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Literal

from rental_storefront.domain.entities.access_grant import AccessGrant
from rental_storefront.domain.entities.code_access import CodeAccess
from rental_storefront.domain.entities.code_validation import CodeValidation
from rental_storefront.domain.entities.rental import RentalSession
from rental_storefront.domain.entities.session import Session
from rental_storefront.domain.value_objects.access_type import FULL_ACCESS, is_access_type
from rental_storefront.domain.value_objects.timestamp import format_timestamp, parse_timestamp

SCHEMA_VERSION = 1

GrantFallback = Literal["permissive", "drop"]

logger = logging.getLogger(__name__)


def _clean_str(value: Any) -> str | None:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _sanitize_grant(raw: Any, fallback: GrantFallback) -> AccessGrant | None:
    if isinstance(raw, Mapping) and is_access_type(raw.get("type")):
        value = _clean_str(raw.get("value"))
        expires_raw = raw.get("expiresAt")
        expires_at = parse_timestamp(expires_raw)
        expiry_ok = expires_raw in (None, "") or expires_at is not None
        if raw["type"] == "time" and expiry_ok:
            return AccessGrant.full_access(expires_at)
        if value and expiry_ok:
            return AccessGrant(raw["type"], value, expires_at)
    logger.debug("session_grant_malformed fallback=%s", fallback)
    if fallback == "drop":
        return None
    return AccessGrant.full_access()


def _sanitize_code(
    item: Any, default_email: str | None, now: datetime, fallback: GrantFallback
) -> CodeAccess | None:
    if isinstance(item, str):
        code = item.strip()
        if not code:
            return None
        return CodeAccess(
            code=code,
            email=default_email or "",
            validation=CodeValidation.legacy(code),
            grant=AccessGrant.full_access(),
            added_at=now,
        )
    if not isinstance(item, Mapping):
        return None
    code = _clean_str(item.get("code"))
    if not code:
        return None
    grant = _sanitize_grant(item.get("grant"), fallback)
    if grant is None:
        return None
    validation_raw = item.get("validation")
    return CodeAccess(
        code=code,
        email=_clean_str(item.get("email")) or default_email or "",
        validation=CodeValidation.from_payload(validation_raw if isinstance(validation_raw, Mapping) else {}),
        grant=grant,
        added_at=parse_timestamp(item.get("addedAt")) or now,
    )


def _legacy_single_code(raw: Mapping[str, Any]) -> list[Any]:
    """The earlier client stored one ``payhipCode`` with its validation at the top level."""
    code = _clean_str(raw.get("payhipCode"))
    if not code:
        return []
    validation = raw.get("validation") if isinstance(raw.get("validation"), Mapping) else None
    if validation is None:
        return [code]
    access_type = validation.get("accessType")
    grant: dict[str, Any] = {"type": "time", "value": FULL_ACCESS}
    if is_access_type(access_type) and access_type != "time":
        grant = {"type": access_type, "value": validation.get("accessValue")}
    return [{"code": code, "validation": validation, "grant": grant}]


def _sanitize_rental(raw: Any) -> RentalSession | None:
    if not isinstance(raw, Mapping):
        return None
    rental_id = _clean_str(raw.get("rentalId"))
    expires_at = parse_timestamp(raw.get("expiresAt"))
    if not rental_id or expires_at is None:
        return None
    return RentalSession(rental_id=rental_id, expires_at=expires_at, signed_url=_clean_str(raw.get("signedUrl")))


def sanitize_session(raw: Any, *, now: datetime, fallback: GrantFallback = "permissive") -> Session:
    """Turns any persisted value into a well-typed Session, never raising.

    Malformed fields degrade to safe defaults instead of rejecting the record:
    bare-string codes become permanent full-access codes, duplicate codes keep
    their first occurrence and rentals without id or expiry are dropped.
    """
    if not isinstance(raw, Mapping):
        if raw is not None:
            logger.debug("session_payload_discarded type=%s", type(raw).__name__)
        return Session()

    email = _clean_str(raw.get("customerEmail"))
    codes_raw = raw.get("codes")
    if codes_raw is None:
        codes_raw = _legacy_single_code(raw)

    codes: list[CodeAccess] = []
    seen: set[str] = set()
    for item in codes_raw if isinstance(codes_raw, list) else []:
        access = _sanitize_code(item, email, now, fallback)
        if access is None or access.code in seen:
            continue
        seen.add(access.code)
        codes.append(access)

    rentals: dict[str, RentalSession] = {}
    rentals_raw = raw.get("rentals")
    if isinstance(rentals_raw, Mapping):
        for movie_id, item in rentals_raw.items():
            rental = _sanitize_rental(item)
            if rental is not None:
                rentals[str(movie_id)] = rental

    return Session(customer_email=email, codes=tuple(codes), rentals=rentals)


def session_to_payload(session: Session) -> dict[str, Any]:
    codes = []
    for c in session.codes:
        grant: dict[str, Any] = {"type": c.grant.type, "value": c.grant.value}
        if c.grant.expires_at is not None:
            grant["expiresAt"] = format_timestamp(c.grant.expires_at)
        codes.append(
            {
                "code": c.code,
                "email": c.email,
                "validation": c.validation.to_payload(),
                "grant": grant,
                "addedAt": format_timestamp(c.added_at),
            }
        )
    rentals = {}
    for movie_id, r in session.rentals.items():
        entry: dict[str, Any] = {"rentalId": r.rental_id, "expiresAt": format_timestamp(r.expires_at)}
        if r.signed_url:
            entry["signedUrl"] = r.signed_url
        rentals[movie_id] = entry
    payload: dict[str, Any] = {"version": SCHEMA_VERSION, "codes": codes, "rentals": rentals}
    if session.customer_email:
        payload["customerEmail"] = session.customer_email
    return payload
