from datetime import date, timedelta

import pytest

from app.models import AuditLog
from app.schemas.citizen import CitizenCreate, CitizenStatusUpdate
from app.schemas.dashboard import FilterCriteria
from app.services.access_control import AccessScope, scope_for_staff_id
from app.services.audit import get_latest_entry
from app.services.citizen_service import CitizenService
from app.services.dashboard_service import DashboardService
from app.services.geography_service import GeographyService


def payload(**overrides):
    values = {
        "last_name": " Reyes ",
        "first_name": "Maria",
        "birth_date": date(1944, 6, 15),
        "sex": "Female",
        "province_code": "P01",
        "lgu_code": "L01",
        "barangay_code": "B01",
    }
    values.update(overrides)
    return CitizenCreate(**values)


def test_create_citizen_encodes_and_audits(seeded_db):
    scope = scope_for_staff_id(seeded_db, "pdo-1")
    citizen = CitizenService(seeded_db).create_citizen(payload(), scope)

    assert citizen.id is not None
    assert citizen.last_name == "Reyes"
    assert citizen.status == "Encoded"
    assert citizen.encoded_by == "pdo-1"
    assert citizen.calendar_year == 2024

    entry = get_latest_entry(seeded_db, "citizens", citizen.id)
    assert entry.action == "create_citizen"
    assert entry.staff_id == "pdo-1"


def test_create_citizen_rejects_future_birth_date(seeded_db):
    with pytest.raises(ValueError):
        CitizenService(seeded_db).create_citizen(
            payload(birth_date=date.today() + timedelta(days=1)), AccessScope.system()
        )


def test_create_citizen_rejects_inconsistent_geography(seeded_db):
    with pytest.raises(ValueError, match="does not belong"):
        CitizenService(seeded_db).create_citizen(
            payload(lgu_code="L03", barangay_code="B03"), AccessScope.system()
        )


def test_create_citizen_outside_assignment_denied(seeded_db):
    scope = scope_for_staff_id(seeded_db, "lgu-1")
    with pytest.raises(PermissionError):
        CitizenService(seeded_db).create_citizen(
            payload(lgu_code="L02", barangay_code="B02"), scope
        )
    assert seeded_db.query(AuditLog).count() == 0


def test_paid_without_payment_date_stamps_today(seeded_db, add_citizen):
    citizen = add_citizen(status="Cleanlisted")
    service = CitizenService(seeded_db)

    updated = service.update_status(
        citizen.id, CitizenStatusUpdate(status="Paid"), AccessScope.system(), today=date(2024, 7, 1)
    )
    assert updated.status == "Paid"
    assert updated.payment_date == date(2024, 7, 1)

    entry = get_latest_entry(seeded_db, "citizens", citizen.id)
    assert entry.details["from"] == "Cleanlisted"
    assert entry.details["to"] == "Paid"


def test_paid_keeps_explicit_payment_date(seeded_db, add_citizen):
    citizen = add_citizen(status="Cleanlisted")
    updated = CitizenService(seeded_db).update_status(
        citizen.id,
        CitizenStatusUpdate(status="Paid", payment_date=date(2024, 3, 3)),
        AccessScope.system(),
    )
    assert updated.payment_date == date(2024, 3, 3)


def test_update_status_missing_citizen_returns_none(seeded_db):
    assert CitizenService(seeded_db).update_status(
        999, CitizenStatusUpdate(status="Validated"), AccessScope.system()
    ) is None


def test_list_citizens_search_and_paging(seeded_db, add_citizen):
    add_citizen(last_name="Reyes", first_name="Maria")
    add_citizen(last_name="Santos", first_name="Jose")
    add_citizen(last_name="Aquino", first_name="Rosa", osca_id="OSCA-REY-1")
    service = CitizenService(seeded_db)

    citizens, total = service.list_citizens(AccessScope.system(), search="rey")
    assert total == 2
    assert [c.last_name for c in citizens] == ["Aquino", "Reyes"]

    page, total = service.list_citizens(AccessScope.system(), page=2, page_size=2)
    assert total == 3
    assert len(page) == 1


def test_get_citizen_out_of_scope(seeded_db, add_citizen):
    citizen = add_citizen(lgu_code="L02", barangay_code="B02")
    with pytest.raises(PermissionError):
        CitizenService(seeded_db).get_citizen(citizen.id, scope_for_staff_id(seeded_db, "lgu-1"))


def test_find_duplicates_compares_encoded_with_existing(seeded_db, add_citizen):
    existing = add_citizen(status="Validated")
    candidate = add_citizen(status="Encoded")
    add_citizen(status="Encoded", last_name="Garcia", first_name="Ines", birth_date=date(1950, 2, 3))

    matches = CitizenService(seeded_db).find_duplicates(AccessScope.system())
    assert len(matches) == 1
    assert matches[0]["citizen_id"] == candidate.id
    assert matches[0]["match_id"] == existing.id
    assert matches[0]["confidence_score"] == 100


def test_dashboard_report_respects_scope(seeded_db, add_citizen):
    add_citizen(status="Paid", lgu_code="L01")
    add_citizen(status="Paid", lgu_code="L02", barangay_code="B02")
    add_citizen(status="Paid", province_code="P02", lgu_code="L03", barangay_code="B03")
    service = DashboardService(seeded_db)
    criteria = FilterCriteria(calendar_years=[2024])

    assert service.get_report(criteria, AccessScope.system())["totalCitizens"] == 3
    report = service.get_report(criteria, scope_for_staff_id(seeded_db, "lgu-1"))
    assert report["totalCitizens"] == 1
    assert report["paymentStats"]["paidAmount"] == 10000
    assert len(report["provinceStats"]) == 4


def test_dashboard_lgu_stats_require_province(seeded_db, add_citizen):
    add_citizen()
    service = DashboardService(seeded_db)
    assert service.get_lgu_stats(FilterCriteria(), AccessScope.system()) == []
    rows = service.get_lgu_stats(FilterCriteria(province_code="P01"), AccessScope.system())
    assert [r["code"] for r in rows] == ["L01", "L02"]
    assert rows[0]["total"] == 1


def test_geography_cascade(seeded_db):
    geography = GeographyService(seeded_db)
    assert [p["code"] for p in geography.get_provinces(region_code="R01")] == ["P01", "P02"]
    assert [l["code"] for l in geography.get_lgus("P01")] == ["L01", "L02"]
    assert [b["code"] for b in geography.get_barangays(lgu_code="L03")] == ["B03"]
    assert geography.validate_hierarchy("P01", "L01", "B01") == (True, "")
    assert geography.validate_hierarchy("P01", "L01", "B02")[0] is False
    assert geography.validate_hierarchy("P09", "L01", "B01")[0] is False
