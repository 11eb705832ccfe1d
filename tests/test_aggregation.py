from datetime import date, datetime

import pandas as pd
import pytest

from app.schemas.dashboard import FilterCriteria
from app.services.aggregation import AggregationEngine, filter_citizens
from app.utils.aggregators import percentage, pivot_status_counts, zero_filled_counts
from tests.conftest import PROVINCES, record

PROVINCE_REFS = [{"code": c, "name": n} for c, n, _ in PROVINCES]


def criteria(**kwargs):
    kwargs.setdefault("calendar_years", [2024])
    return FilterCriteria(**kwargs)


def test_percentage_zero_division_guard():
    assert percentage(0, 0) == 0
    assert percentage(5, 0) == 0
    assert percentage(1, 3) == pytest.approx(100 / 3)
    assert percentage(1, 3) != 33.33


def test_zero_filled_counts_keeps_empty_buckets():
    df = pd.DataFrame({"month": [1, 1, 6]})
    assert zero_filled_counts(df, "month", [1, 3, 6]) == {1: 2, 3: 0, 6: 1}
    assert zero_filled_counts(df.iloc[0:0], "month", [1, 2]) == {1: 0, 2: 0}


def test_pivot_status_counts_left_joins_reference_keys():
    df = pd.DataFrame({"province_code": ["P01", "P01"], "status": ["Paid", "Encoded"]})
    table = pivot_status_counts(df, "province_code", ["P01", "P02"], ["Encoded", "Paid", "Unpaid"])
    assert table.loc["P01", "Paid"] == 1
    assert table.loc["P01", "total"] == 2
    assert table.loc["P02", "total"] == 0


def test_end_to_end_paid_scenario():
    engine = AggregationEngine([
        record(date(1944, 6, 15), status="Paid"),
        record(date(1939, 6, 15), status="Paid", sex="Female"),
    ], criteria(calendar_years=[2024]))

    paid_by_age = {row["age"]: row for row in engine.paid_by_specific_age()}
    assert paid_by_age[80]["count"] == 1
    assert paid_by_age[85]["count"] == 1
    assert paid_by_age[85]["femaleCount"] == 1
    assert paid_by_age[85]["femalePercentage"] == 100
    assert paid_by_age[80]["percentage"] == 50
    assert paid_by_age[90]["count"] == 0
    assert paid_by_age[90]["totalAmount"] == 0
    assert paid_by_age[100]["cashGift"] == 100000

    stats = engine.payment_stats()
    assert stats["paid"] == 2
    assert stats["paidAmount"] == 20000
    assert stats["total"] == 2


def test_status_omits_absent_buckets_but_month_zero_fills():
    engine = AggregationEngine([
        record(date(1944, 6, 15), status="Paid"),
        record(date(1939, 1, 2), status="Encoded"),
    ], criteria())

    statuses = [row["status"] for row in engine.by_status()]
    assert statuses == ["Encoded", "Paid"]
    assert "Compliance" not in statuses

    months = engine.by_birth_month()
    assert len(months) == 12
    assert {"month": "March", "count": 0} in months
    assert {"month": "June", "count": 1} in months

    quarters = engine.by_birth_quarter()
    assert quarters == [
        {"quarter": "Q1", "count": 1},
        {"quarter": "Q2", "count": 1},
        {"quarter": "Q3", "count": 0},
        {"quarter": "Q4", "count": 0},
    ]


def test_sex_omits_absent_values():
    engine = AggregationEngine([record(date(1944, 6, 15), sex="Female")], criteria())
    assert engine.by_sex() == [{"sex": "Female", "count": 1}]


def test_age_tier_uses_first_selected_year():
    records = [
        record(date(1944, 6, 15)),   # 2024 cohort
        record(date(1940, 6, 15)),   # 2025 cohort
    ]
    engine = AggregationEngine(records, criteria(calendar_years=[2025, 2024]))
    # ages in 2025: 81 and 85
    assert engine.by_age_tier() == [{"range": "80", "count": 1}, {"range": "85", "count": 1}]


def test_geography_zero_fill_with_no_citizens():
    engine = AggregationEngine([], criteria())
    rows = engine.by_province(PROVINCE_REFS)
    assert len(rows) == 4
    for row in rows:
        assert row["total"] == 0
        assert row["paid"] == 0
        assert row["disqualified"] == 0


def test_empty_engine_reports():
    engine = AggregationEngine([], criteria())
    assert engine.total == 0
    assert engine.by_status() == []
    assert engine.by_sex() == []
    assert engine.by_age_tier() == []
    assert all(row["count"] == 0 for row in engine.paid_by_specific_age())
    assert len(engine.paid_by_specific_age()) == 5
    assert engine.payment_stats()["paidAmount"] == 0


def test_lgu_rows_only_for_selected_province():
    engine = AggregationEngine([
        record(date(1944, 6, 15), lgu_code="L01"),
        record(date(1944, 6, 15), lgu_code="L02", barangay_code="B02"),
    ], criteria(province_code="P01"))
    rows = engine.by_lgu([{"code": "L01", "name": "Bangued"}, {"code": "L02", "name": "Dolores"}])
    assert [(r["code"], r["encoded"]) for r in rows] == [("L01", 1), ("L02", 1)]


def test_report_leaves_lgu_stats_empty_without_province():
    engine = AggregationEngine([record(date(1944, 6, 15))], criteria())
    report = engine.build_report(PROVINCE_REFS, [{"code": "L01", "name": "Bangued"}])
    assert report["lguStats"] == []
    assert report["totalCitizens"] == 1
    assert report["filters"]["calendar_years"] == [2024]


def test_filter_registration_date_range_is_inclusive():
    records = [
        record(date(1944, 1, 1), created_at=datetime(2024, 1, 31, 23, 59)),
        record(date(1944, 1, 1), created_at=datetime(2024, 2, 1, 0, 0)),
    ]
    df = filter_citizens(records, criteria(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)))
    assert len(df) == 1


def test_filter_payment_date_excludes_unpaid_rows():
    records = [
        record(date(1944, 1, 1), status="Paid", payment_date=date(2024, 5, 1)),
        record(date(1944, 1, 1), status="Validated"),
    ]
    df = filter_citizens(records, criteria(payment_date_start=date(2024, 1, 1)))
    assert list(df["status"]) == ["Paid"]


def test_filter_calendar_year_and_status():
    records = [
        record(date(1944, 1, 1), status="Paid"),       # 2024
        record(date(1940, 1, 1), status="Paid"),       # 2025
        record(date(1939, 1, 1), status="Encoded"),    # 2024
    ]
    df = filter_citizens(records, criteria(calendar_years=[2024], statuses=["Paid"]))
    assert len(df) == 1
    assert df.iloc[0]["birth_year"] == 1944


def test_filter_age_range_any_year():
    records = [record(date(1944, 1, 1)), record(date(1929, 1, 1))]
    df = filter_citizens(records, criteria(age_start=80, age_end=84))
    assert list(df["birth_year"]) == [1944]


def test_filter_geography_applied_literally():
    records = [record(date(1944, 1, 1), province_code="P02", lgu_code="L03", barangay_code="B03")]
    # LGU L01 is not in P02; no cascade check, simply no match
    df = filter_citizens(records, criteria(province_code="P02", lgu_code="L01"))
    assert df.empty


def test_invalid_criteria_rejected():
    with pytest.raises(ValueError):
        FilterCriteria(age_start=90, age_end=80)
    with pytest.raises(ValueError):
        FilterCriteria(statuses=["Pending"])
    with pytest.raises(ValueError):
        FilterCriteria(calendar_years=[])


def test_by_geography_with_lgu_key():
    engine = AggregationEngine([
        record(date(1944, 6, 15), status="Paid", lgu_code="L02", barangay_code="B02"),
    ], criteria())
    rows = engine.by_geography([{"code": "L02", "name": "Dolores"}, {"code": "L01", "name": "Bangued"}],
                               key="lgu_code")
    assert [r["code"] for r in rows] == ["L01", "L02"]
    assert rows[0]["total"] == 0
    assert rows[1]["paid"] == 1


def test_geography_rows_carry_paid_percentage():
    engine = AggregationEngine([
        record(date(1944, 6, 15), status="Paid"),
        record(date(1944, 6, 15), status="Encoded"),
    ], criteria())
    rows = {row["code"]: row for row in engine.by_province(PROVINCE_REFS)}
    assert rows["P01"]["paidPercentage"] == 50
    assert rows["P02"]["total"] == 0
    assert rows["P02"]["paidPercentage"] == 0


def test_geography_rows_ignore_repeated_reference_codes():
    engine = AggregationEngine([record(date(1944, 6, 15), status="Paid")], criteria())
    rows = engine.by_province([
        {"code": "P01", "name": "Abra"},
        {"code": "P01", "name": "Abra (duplicate)"},
        {"code": "P02", "name": "Benguet"},
    ])
    assert [(r["code"], r["name"]) for r in rows] == [("P01", "Abra"), ("P02", "Benguet")]
    assert rows[0]["paid"] == 1
    assert rows[0]["paidPercentage"] == 100
