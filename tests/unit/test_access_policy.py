from __future__ import annotations
from datetime import timedelta

import pytest

from rental_storefront.domain.entities.access_grant import AccessGrant
from rental_storefront.domain.entities.code_access import CodeAccess
from rental_storefront.domain.services.access_policy import derive_grant, has_access, select_code_for
from tests.unit._fakes import NOW, make_validation


def _access(code, grant, success=True):
    return CodeAccess(code, "a@b.c", make_validation(success=success, code=code), grant, NOW)


def test_duration_becomes_absolute_expiry():
    grant = derive_grant(make_validation("time", "all", duration=3600), NOW)
    assert grant == AccessGrant("time", "all", NOW + timedelta(hours=1))


def test_unknown_access_type_defaults_to_full_access():
    grant = derive_grant(make_validation("weird", "x"), NOW)
    assert grant.type == "time" and grant.value == "all" and grant.is_permanent


def test_film_grant_requires_value():
    with pytest.raises(ValueError):
        derive_grant(make_validation("film"), NOW)


def test_no_grants_means_no_access():
    assert has_access([], "m1", "drama") is False


def test_category_grant_needs_category():
    grants = [AccessGrant("category", "drama")]
    assert has_access(grants, "m1", "drama")
    assert not has_access(grants, "m1")


def test_select_prefers_film_over_full_access():
    codes = [_access("T1", AccessGrant.full_access()), _access("F1", AccessGrant("film", "m1"))]
    assert select_code_for(codes, "m1", None, NOW).code == "F1"
    assert select_code_for(codes, "m2", None, NOW).code == "T1"


def test_select_ignores_failed_and_expired_codes():
    codes = [
        _access("BAD", AccessGrant("film", "m1"), success=False),
        _access("OLD", AccessGrant("film", "m1", NOW - timedelta(seconds=1))),
    ]
    assert select_code_for(codes, "m1", None, NOW) is None


def test_duration_past_the_calendar_end_is_permanent():
    grant = derive_grant(make_validation("time", "all", duration=1e12), NOW)
    assert grant.is_permanent
    assert grant.is_active(NOW)
