from datetime import date

import pytest

from app.models import Citizen
from app.services.access_control import AccessScope, scope_for_staff_id


def visible_lgus(db, scope):
    return sorted(c.lgu_code for c in scope.apply(db.query(Citizen)).all())


@pytest.fixture
def spread_citizens(add_citizen):
    add_citizen(lgu_code="L01", barangay_code="B01")
    add_citizen(lgu_code="L02", barangay_code="B02", first_name="Maria")
    add_citizen(province_code="P02", lgu_code="L03", barangay_code="B03", first_name="Pedro")


def test_administrator_sees_everything(seeded_db, spread_citizens):
    scope = scope_for_staff_id(seeded_db, "admin-1")
    assert scope.unrestricted
    assert visible_lgus(seeded_db, scope) == ["L01", "L02", "L03"]


def test_province_assignment_covers_every_lgu(seeded_db, spread_citizens):
    scope = scope_for_staff_id(seeded_db, "pdo-1")
    assert visible_lgus(seeded_db, scope) == ["L01", "L02"]


def test_lgu_assignment_covers_only_that_lgu(seeded_db, spread_citizens):
    scope = scope_for_staff_id(seeded_db, "lgu-1")
    assert visible_lgus(seeded_db, scope) == ["L01"]


def test_no_assignments_sees_nothing(seeded_db, spread_citizens):
    scope = scope_for_staff_id(seeded_db, "pdo-none")
    assert scope is not None
    assert visible_lgus(seeded_db, scope) == []
    assert not scope.can_view("P01", "L01")


def test_unknown_and_inactive_staff_have_no_scope(seeded_db):
    assert scope_for_staff_id(seeded_db, "nobody") is None
    assert scope_for_staff_id(seeded_db, "inactive-1") is None


def test_require_raises_outside_assignment():
    scope = AccessScope(staff_id="x", position="LGU", assignments=[("P01", "L01")])
    scope.require("P01", "L01")
    with pytest.raises(PermissionError):
        scope.require("P01", "L02")
    with pytest.raises(PermissionError):
        scope.require("P02", "L03")


def test_system_scope_is_unrestricted():
    assert AccessScope.system().can_view("P99", None)
