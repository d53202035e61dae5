from __future__ import annotations

from rental_storefront.application import messages
from rental_storefront.application.errors import ApiError, TransportError
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.application.use_cases.redeem_code import RedeemCodeUseCase
from rental_storefront.infrastructure.adapters.session.memory_store import InMemorySessionPersistence
from tests.unit._fakes import FakeValidator, FixedClock, make_validation


def _uc(validator):
    store = SessionStore(InMemorySessionPersistence(), clock=FixedClock())
    return RedeemCodeUseCase(validator=validator, store=store), store


def test_code_and_email_are_required():
    validator = FakeValidator()
    uc, _ = _uc(validator)
    res = uc.execute("  ", "a@b.c")
    assert res.status == "ERROR" and res.message == messages.MISSING_CODE_OR_EMAIL
    assert validator.calls == []


def test_valid_code_is_added():
    uc, store = _uc(FakeValidator(make_validation("category", "drama")))
    res = uc.execute(" CODE-1 ", "a@b.c")
    assert res.status == "REDEEMED"
    assert store.codes[0].code == "CODE-1"
    assert store.has_access("m1", "drama")


def test_server_message_is_surfaced_and_session_unchanged():
    uc, store = _uc(FakeValidator(error=ApiError("POST -> 404", status_code=404, server_message="Code inconnu")))
    res = uc.execute("CODE-1", "a@b.c")
    assert (res.status, res.message) == ("ERROR", "Code inconnu")
    assert store.snapshot().is_empty


def test_transport_failure_uses_fallback_text():
    uc, _ = _uc(FakeValidator(error=TransportError("timed out")))
    assert uc.execute("CODE-1", "a@b.c").message == messages.VALIDATION_FAILED


def test_rejected_code_is_not_stored():
    uc, store = _uc(FakeValidator(make_validation(success=False)))
    res = uc.execute("CODE-1", "a@b.c")
    assert res.message == messages.CODE_REJECTED
    assert store.codes == ()


def test_huge_duration_is_redeemed_as_permanent():
    uc, store = _uc(FakeValidator(make_validation("time", "all", duration=1e12)))
    res = uc.execute("BIG", "a@b.c")
    assert res.status == "REDEEMED"
    assert res.access.grant.is_permanent
    assert store.has_access("m1")


def test_film_code_without_movie_is_rejected():
    uc, store = _uc(FakeValidator(make_validation("film")))
    res = uc.execute("F1", "a@b.c")
    assert (res.status, res.message) == ("ERROR", messages.CODE_REJECTED)
    assert store.codes == ()
