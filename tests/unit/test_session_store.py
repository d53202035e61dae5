from __future__ import annotations
from datetime import timedelta

import pytest

from rental_storefront.application.errors import CodeValidationError
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.domain.entities.rental import RentalSession
from rental_storefront.infrastructure.adapters.session.memory_store import InMemorySessionPersistence
from tests.unit._fakes import NOW, FailingPersistence, FixedClock, make_validation


def _store(persistence=None, clock=None):
    return SessionStore(persistence or InMemorySessionPersistence(), clock=clock or FixedClock())


def test_film_code_scenario():
    store = _store()
    store.add_code("X1", "a@b.c", make_validation("film", "m42"))
    assert store.has_access("m42") is True
    assert store.has_access("other") is False


def test_redeeming_twice_keeps_one_entry_with_latest_validation():
    store = _store()
    store.add_code("X1", "a@b.c", make_validation("film", "m1"))
    store.add_code("X1", "z@b.c", make_validation("film", "m2"))
    assert len(store.codes) == 1
    assert store.codes[0].validation.access_value == "m2"
    assert store.customer_email == "z@b.c"


def test_expired_grants_are_excluded_at_query_time():
    clock = FixedClock()
    store = _store(clock=clock)
    store.add_code("T1", "a@b.c", make_validation("time", "all", duration=60))
    store.add_code("P1", "a@b.c", make_validation("film", "m1"))
    assert len(store.get_active_access()) == 2
    clock.advance(seconds=61)
    active = store.get_active_access()
    assert [g.type for g in active] == ["film"]
    assert store.has_access("m2") is False
    clock.advance(days=3650)
    assert store.has_access("m1") is True


def test_clear_session_empties_everything():
    store = _store()
    store.add_code("X1", "a@b.c", make_validation())
    store.upsert_rental("m1", RentalSession("r1", NOW + timedelta(days=1), "https://cdn/x"))
    store.clear_session()
    snapshot = store.snapshot()
    assert snapshot.codes == () and dict(snapshot.rentals) == {} and snapshot.customer_email is None


def test_mutations_are_persisted_and_reloaded():
    persistence = InMemorySessionPersistence()
    store = _store(persistence)
    store.add_code("X1", "a@b.c", make_validation("category", "drama"))
    store.upsert_rental("m1", RentalSession("r1", NOW + timedelta(days=1)))
    reloaded = _store(persistence)
    assert reloaded.snapshot() == store.snapshot()
    assert reloaded.has_access("m9", "drama")


def test_failed_write_leaves_state_untouched():
    store = _store(FailingPersistence())
    with pytest.raises(OSError):
        store.add_code("X1", "a@b.c", make_validation())
    assert store.codes == ()
    assert store.customer_email is None


def test_remove_unknown_code_is_a_noop():
    persistence = InMemorySessionPersistence()
    store = _store(persistence)
    store.add_code("X1", "a@b.c", make_validation())
    writes = persistence.writes
    assert store.remove_code("nope") is False
    assert persistence.writes == writes
    assert store.remove_code("X1") is True
    assert store.codes == ()


def test_listeners_receive_new_snapshot():
    store = _store()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.add_code("X1", "a@b.c", make_validation())
    unsubscribe()
    store.clear_session()
    assert len(seen) == 1
    assert seen[0].codes[0].code == "X1"


def test_codes_with_status_labels():
    clock = FixedClock()
    store = _store(clock=clock)
    store.add_code("ABCDEFGHIJ", "a@b.c", make_validation("time", "all", duration=7200))
    store.add_code("F1", "a@b.c", make_validation("film", "m1"))
    statuses = store.codes_with_status()
    assert [s.time_remaining for s in statuses] == ["2h", "Permanent"]
    assert statuses[0].code_preview == "ABCDEFGH..."
    assert statuses[1].label == "Film: m1"
    clock.advance(hours=3)
    assert store.codes_with_status()[0].time_remaining == "Expiré"
    assert store.codes_with_status()[0].expired


def test_unusable_grant_raises_code_validation_error():
    store = _store()
    with pytest.raises(CodeValidationError):
        store.add_code("C1", "a@b.c", make_validation("category"))
    assert store.codes == ()


def test_remove_code_strips_like_add_code():
    store = _store()
    store.add_code(" X1 ", "a@b.c", make_validation())
    assert store.codes[0].code == "X1"
    assert store.remove_code(" X1 ") is True
    assert store.codes == ()


def test_snapshot_rentals_are_read_only():
    persistence = InMemorySessionPersistence()
    store = _store(persistence)
    store.upsert_rental("m1", RentalSession("r1", NOW + timedelta(days=1)))
    writes = persistence.writes
    with pytest.raises(TypeError):
        store.snapshot().rentals["m2"] = RentalSession("r2", NOW + timedelta(days=1))
    assert store.rental_for("m2") is None
    assert persistence.writes == writes
