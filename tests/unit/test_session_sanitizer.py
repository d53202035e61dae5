from __future__ import annotations

from rental_storefront.domain.services.session_sanitizer import sanitize_session, session_to_payload
from tests.unit._fakes import NOW


def test_garbage_yields_empty_session():
    for raw in (None, "oops", 42, ["abc"]):
        session = sanitize_session(raw, now=NOW)
        assert session.is_empty


def test_legacy_bare_string_code_gets_permanent_full_access():
    session = sanitize_session({"codes": ["abc"]}, now=NOW)
    assert len(session.codes) == 1
    access = session.codes[0]
    assert access.code == "abc"
    assert (access.grant.type, access.grant.value, access.grant.expires_at) == ("time", "all", None)


def test_duplicate_codes_keep_first_occurrence():
    raw = {
        "codes": [
            {"code": "A", "grant": {"type": "film", "value": "m1"}},
            {"code": "A", "grant": {"type": "film", "value": "m2"}},
            "A",
        ]
    }
    session = sanitize_session(raw, now=NOW)
    assert [(c.code, c.grant.value) for c in session.codes] == [("A", "m1")]


def test_rental_without_expiry_or_id_is_dropped():
    raw = {
        "rentals": {
            "m1": {"rentalId": "r1"},
            "m2": {"expiresAt": "2025-01-02T00:00:00Z"},
            "m3": {"rentalId": "r3", "expiresAt": "2025-01-02T00:00:00Z"},
        }
    }
    session = sanitize_session(raw, now=NOW)
    assert list(session.rentals) == ["m3"]
    assert session.rentals["m3"].signed_url is None


def test_malformed_grant_policy():
    raw = {"codes": [{"code": "Z", "grant": {"type": "vip", "value": "gold"}}]}
    permissive = sanitize_session(raw, now=NOW)
    assert permissive.codes[0].grant.type == "time"
    assert permissive.codes[0].grant.is_permanent
    assert sanitize_session(raw, now=NOW, fallback="drop").codes == ()


def test_legacy_single_code_document():
    raw = {
        "payhipCode": "OLD-1",
        "customerEmail": "old@b.c",
        "validation": {"success": True, "licenseKey": "OLD-1", "accessType": "film", "accessValue": "m42"},
    }
    session = sanitize_session(raw, now=NOW)
    assert session.customer_email == "old@b.c"
    access = session.codes[0]
    assert (access.code, access.email, access.grant.type, access.grant.value) == ("OLD-1", "old@b.c", "film", "m42")
    assert access.validation.success


def test_payload_reloads_to_same_session():
    raw = {
        "customerEmail": "a@b.c",
        "codes": [
            {"code": "A", "email": "a@b.c", "validation": {"success": True},
             "grant": {"type": "category", "value": "drama", "expiresAt": "2025-02-01T00:00:00Z"},
             "addedAt": "2025-01-01T00:00:00Z"},
        ],
        "rentals": {"m1": {"rentalId": "r1", "signedUrl": "https://cdn/x", "expiresAt": "2025-01-03T00:00:00Z"}},
    }
    session = sanitize_session(raw, now=NOW)
    payload = session_to_payload(session)
    assert payload["version"] == 1
    assert payload["codes"][0]["grant"]["expiresAt"] == "2025-02-01T00:00:00Z"
    assert sanitize_session(payload, now=NOW) == session
