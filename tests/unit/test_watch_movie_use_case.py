from __future__ import annotations
from datetime import datetime, timedelta, timezone

from rental_storefront.application import messages
from rental_storefront.application.errors import ApiError
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.application.use_cases.resume_rental import ResumeRentalUseCase
from rental_storefront.application.use_cases.watch_movie import WatchMovieUseCase
from rental_storefront.domain.entities.rental import RentalSession
from rental_storefront.domain.value_objects.timestamp import END_OF_TIME
from rental_storefront.infrastructure.adapters.session.memory_store import InMemorySessionPersistence
from tests.unit._fakes import NOW, FakeRentals, FixedClock, make_envelope, make_movie, make_validation


def _setup(initial=None, rentals=None):
    clock = FixedClock()
    store = SessionStore(InMemorySessionPersistence(initial), clock=clock)
    rentals = rentals or FakeRentals()
    return WatchMovieUseCase(store, rentals, clock=clock), store, rentals


def test_no_access_is_reported_without_calling_the_service():
    uc, _, rentals = _setup()
    res = uc.execute(make_movie("m1"))
    assert (res.status, res.message) == ("NO_ACCESS", messages.NO_ACCESS)
    assert rentals.created == []


def test_rental_is_issued_and_cached():
    uc, store, rentals = _setup()
    store.add_code("F1", "a@b.c", make_validation("film", "m1"))
    res = uc.execute(make_movie("m1"))
    assert res.ok
    assert res.signed_url == "https://cdn.test/r1?token=abc"
    assert rentals.created == [("m1", "a@b.c", "F1")]
    cached = store.rental_for("m1")
    assert cached.rental_id == "r1"
    assert cached.expires_at == datetime(2025, 1, 3, 12, 0, tzinfo=timezone.utc)


def test_code_covering_the_movie_is_preferred():
    uc, store, rentals = _setup()
    store.add_code("T1", "a@b.c", make_validation("time", "all"))
    store.add_code("C1", "a@b.c", make_validation("category", "drama"))
    uc.execute(make_movie("m1", "drama"))
    assert rentals.created[0][2] == "C1"


def test_codes_without_email_require_validation():
    uc, _, _ = _setup(initial={"codes": ["abc"]})
    assert uc.execute(make_movie("m1")).status == "CODE_REQUIRED"


def test_unvalidated_code_is_not_eligible():
    initial = {"customerEmail": "a@b.c", "codes": [{"code": "Z", "grant": {"type": "time", "value": "all"}}]}
    uc, _, rentals = _setup(initial=initial)
    res = uc.execute(make_movie("m1"))
    assert (res.status, res.message) == ("NO_ELIGIBLE_CODE", messages.NO_ELIGIBLE_CODE)
    assert rentals.created == []


def test_failure_keeps_cached_rental():
    rentals = FakeRentals(error=ApiError("POST -> 429", status_code=429, server_message="Trop de locations"))
    uc, store, _ = _setup(rentals=rentals)
    store.add_code("F1", "a@b.c", make_validation("film", "m1"))
    previous = RentalSession("old", NOW + timedelta(hours=1), "https://cdn/old")
    store.upsert_rental("m1", previous)
    res = uc.execute(make_movie("m1"))
    assert (res.status, res.message) == ("ERROR", "Trop de locations")
    assert store.rental_for("m1") == previous
    assert len(rentals.created) == 1


def test_missing_signed_url_is_an_error():
    uc, store, _ = _setup(rentals=FakeRentals(make_envelope(signed_url=None)))
    store.add_code("F1", "a@b.c", make_validation("film", "m1"))
    res = uc.execute(make_movie("m1"))
    assert res.message == messages.SIGNED_URL_UNAVAILABLE
    assert store.rental_for("m1") is None


def test_missing_expiry_falls_back_to_rental_duration():
    uc, store, _ = _setup(rentals=FakeRentals(make_envelope(expires_at=None)))
    store.add_code("F1", "a@b.c", make_validation("film", "m1"))
    uc.execute(make_movie("m1", hours=24))
    assert store.rental_for("m1").expires_at == NOW + timedelta(hours=24)


def test_duplicate_request_for_same_movie_is_serialized():
    uc, store, rentals = _setup()
    store.add_code("F1", "a@b.c", make_validation("film", "m1"))
    nested = []
    rentals.on_create = lambda: nested.append(uc.execute(make_movie("m1")))
    res = uc.execute(make_movie("m1"))
    assert res.ok
    assert [r.status for r in nested] == ["IN_PROGRESS"]
    assert len(rentals.created) == 1
    assert not uc.is_pending("m1")


def test_resume_refetches_missing_signed_url():
    clock = FixedClock()
    store = SessionStore(InMemorySessionPersistence(), clock=clock)
    rentals = FakeRentals(make_envelope(rental_id="r7", signed_url="https://cdn/fresh"))
    uc = ResumeRentalUseCase(store, rentals, clock=clock)
    assert uc.execute("m1").status == "NO_RENTAL"

    store.upsert_rental("m1", RentalSession("r7", NOW + timedelta(hours=2)))
    res = uc.execute("m1")
    assert res.signed_url == "https://cdn/fresh"
    assert rentals.fetched == ["r7"]
    assert store.rental_for("m1").signed_url == "https://cdn/fresh"

    uc.execute("m1")
    assert rentals.fetched == ["r7"]


def test_resume_ignores_expired_rental():
    clock = FixedClock()
    store = SessionStore(InMemorySessionPersistence(), clock=clock)
    store.upsert_rental("m1", RentalSession("r1", NOW - timedelta(minutes=1), "https://cdn/old"))
    res = ResumeRentalUseCase(store, FakeRentals(), clock=clock).execute("m1")
    assert res.status == "NO_RENTAL"


def test_rental_duration_past_the_calendar_end_is_clamped():
    uc, store, _ = _setup(rentals=FakeRentals(make_envelope(expires_at=None)))
    store.add_code("F1", "a@b.c", make_validation("film", "m1"))
    res = uc.execute(make_movie("m1", hours=1e12))
    assert res.ok
    assert store.rental_for("m1").expires_at == END_OF_TIME
