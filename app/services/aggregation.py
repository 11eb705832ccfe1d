"""
Aggregation engine - reduces citizen records into dashboard tables.

Records are loaded into a pandas DataFrame once, pushed through the filter
pipeline, and every grouping then reads the same filtered frame. Nothing is
cached between calls.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from app.schemas.dashboard import FilterCriteria
from app.services.eligibility import (
    age_in_range,
    age_tier_label,
    calendar_year_for,
    cash_amount_for_age,
    eligibility,
    exact_age_eligibility,
    reference_year,
)
from app.utils.aggregators import (
    count_by,
    percentage,
    pivot_status_counts,
    zero_filled_counts,
)
from app.utils.constants import (
    AGE_TIER_LABELS,
    BENEFIT_AGES,
    CITIZEN_STATUSES,
    MONTH_NAMES,
    QUARTER_LABELS,
    SEXES,
    STATUS_KEYS,
)
from app.utils.date_utils import birth_quarter, to_date

logger = logging.getLogger(__name__)

RECORD_COLUMNS = [
    "id",
    "created_at",
    "birth_date",
    "sex",
    "status",
    "province_code",
    "lgu_code",
    "barangay_code",
    "payment_date",
]


def citizens_to_frame(records: Iterable[Any]) -> pd.DataFrame:
    """
    Build the working DataFrame from citizen records.

    Args:
        records: Dicts with RECORD_COLUMNS keys, or objects exposing to_record()

    Returns:
        DataFrame with the record columns plus birth_year, birth_month,
        birth_quarter and the derived calendar_year
    """
    rows = [r if isinstance(r, dict) else r.to_record() for r in records]
    df = pd.DataFrame(rows, columns=RECORD_COLUMNS)

    df["birth_year"] = [d.year for d in df["birth_date"]]
    df["birth_month"] = [d.month for d in df["birth_date"]]
    df["birth_quarter"] = [birth_quarter(m) for m in df["birth_month"]]
    df["calendar_year"] = [calendar_year_for(y) for y in df["birth_year"]]
    return df


def _within(value, start, end) -> bool:
    if value is None or pd.isna(value):
        return False
    value = to_date(value)
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def _select(df: pd.DataFrame, mask) -> pd.DataFrame:
    return df.loc[np.asarray(mask, dtype=bool)]


def apply_filters(df: pd.DataFrame, criteria: FilterCriteria) -> pd.DataFrame:
    """
    Run the ordered filter pipeline. Unset filters are skipped.

    1. registration date range
    2. payment date range
    3. province, LGU, barangay (applied literally, no cascade check)
    4. status set
    5. calendar year in target years
    6. age range in any target year
    """
    if df.empty:
        return df

    years = list(criteria.calendar_years)

    if criteria.start_date is not None or criteria.end_date is not None:
        df = _select(df, [_within(v, criteria.start_date, criteria.end_date) for v in df["created_at"]])

    if criteria.payment_date_start is not None or criteria.payment_date_end is not None:
        df = _select(df, [
            _within(v, criteria.payment_date_start, criteria.payment_date_end)
            for v in df["payment_date"]
        ])

    if criteria.province_code:
        df = df[df["province_code"] == criteria.province_code]
    if criteria.lgu_code:
        df = df[df["lgu_code"] == criteria.lgu_code]
    if criteria.barangay_code:
        df = df[df["barangay_code"] == criteria.barangay_code]

    if criteria.statuses:
        df = df[df["status"].isin(criteria.statuses)]

    df = df[df["calendar_year"].isin(years)]

    if criteria.age_start is not None or criteria.age_end is not None:
        df = _select(df, [
            age_in_range(y, years, criteria.age_start, criteria.age_end)
            for y in df["birth_year"]
        ])

    return df


def filter_citizens(records: Iterable[Any], criteria: FilterCriteria) -> pd.DataFrame:
    """Convenience wrapper: build the frame and filter it."""
    return apply_filters(citizens_to_frame(records), criteria)


def _code_name(item) -> Dict[str, str]:
    if isinstance(item, dict):
        return {"code": item["code"], "name": item["name"]}
    return {"code": item.code, "name": item.name}


class AggregationEngine:
    """Grouped dashboard tables over one filtered set of citizens."""

    def __init__(self, records: Iterable[Any], criteria: FilterCriteria):
        self.criteria = criteria
        self.years = list(criteria.calendar_years)
        self.df = filter_citizens(records, criteria)
        logger.debug(f"Aggregating {len(self.df)} citizens for years {self.years}")

    @property
    def total(self) -> int:
        return len(self.df)

    def by_status(self) -> List[Dict[str, Any]]:
        """Counts per status; statuses with no citizens are left out."""
        counts = count_by(self.df, "status", CITIZEN_STATUSES)
        return [{"status": k, "count": v} for k, v in counts.items()]

    def by_sex(self) -> List[Dict[str, Any]]:
        """Counts per sex; absent values are left out."""
        counts = count_by(self.df, "sex", SEXES)
        return [{"sex": k, "count": v} for k, v in counts.items()]

    def by_age_tier(self) -> List[Dict[str, Any]]:
        """
        Counts per age tier, with age taken in the reference year (the
        first selected year). Citizens under 80 there are not counted.
        """
        if self.df.empty:
            return []

        ref_year = reference_year(self.years)
        tiers = pd.DataFrame({
            "tier": [age_tier_label(ref_year - y) for y in self.df["birth_year"]]
        }).dropna()
        counts = count_by(tiers, "tier", AGE_TIER_LABELS)
        return [{"range": k, "count": v} for k, v in counts.items()]

    def by_birth_month(self) -> List[Dict[str, Any]]:
        """Counts for all twelve birth months, zero-filled."""
        counts = zero_filled_counts(self.df, "birth_month", list(range(1, 13)))
        return [{"month": MONTH_NAMES[m - 1], "count": c} for m, c in counts.items()]

    def by_birth_quarter(self) -> List[Dict[str, Any]]:
        """Counts for all four birth quarters, zero-filled."""
        counts = zero_filled_counts(self.df, "birth_quarter", [1, 2, 3, 4])
        return [{"quarter": QUARTER_LABELS[q - 1], "count": c} for q, c in counts.items()]

    def payment_stats(self) -> Dict[str, int]:
        """
        Count and cash total for each of the eight statuses.

        Each citizen is credited once, at the highest age reached across the
        selected years.
        """
        stats: Dict[str, int] = {}
        if self.df.empty:
            amounts = pd.Series(dtype="int64")
        else:
            amounts = pd.Series(
                [eligibility(y, self.years).cash_amount for y in self.df["birth_year"]],
                index=self.df.index,
            )

        for status in CITIZEN_STATUSES:
            key = STATUS_KEYS[status]
            mask = self.df["status"] == status
            stats[key] = int(mask.sum())
            stats[f"{key}Amount"] = int(amounts[mask].sum()) if stats[key] else 0

        stats["total"] = self.total
        return stats

    def by_geography(self, reference: Iterable[Any], key: str = "province_code") -> List[Dict[str, Any]]:
        """
        Per-status counts for every reference place, sorted by name.

        Args:
            reference: Code/name entries (dicts or ORM rows); places with no
                citizens still get a row of zeros
            key: Citizen column the codes refer to (province_code, lgu_code)
        """
        return self._geography_rows(self.df, key, reference)

    def _geography_rows(self, df: pd.DataFrame, key_column: str, reference: Iterable[Any]) -> List[Dict[str, Any]]:
        # first entry wins when a code repeats
        unique = {}
        for place in (_code_name(p) for p in reference):
            unique.setdefault(place["code"], place)
        places = sorted(unique.values(), key=lambda p: p["name"])
        codes = [p["code"] for p in places]
        table = pivot_status_counts(df, key_column, codes, CITIZEN_STATUSES)

        rows = []
        for place in places:
            counts = table.loc[place["code"]]
            row = {"code": place["code"], "name": place["name"]}
            for status in CITIZEN_STATUSES:
                row[STATUS_KEYS[status]] = int(counts[status])
            row["total"] = int(counts["total"])
            row["paidPercentage"] = percentage(row["paid"], row["total"])
            rows.append(row)
        return rows

    def by_province(self, provinces: Iterable[Any]) -> List[Dict[str, Any]]:
        """Per-status counts for every reference province, zero-filled."""
        return self.by_geography(provinces, key="province_code")

    def by_lgu(self, lgus: Iterable[Any], province_code: Optional[str] = None) -> List[Dict[str, Any]]:
        """Per-status counts for every reference LGU of the selected province."""
        province_code = province_code or self.criteria.province_code
        df = self.df
        if province_code:
            df = df[df["province_code"] == province_code]
        return self._geography_rows(df, "lgu_code", lgus)

    def paid_by_specific_age(self) -> List[Dict[str, Any]]:
        """
        Paid citizens reaching each exact milestone age in any selected year,
        split by sex. All five ages are always reported.
        """
        paid = self.df[self.df["status"] == "Paid"] if not self.df.empty else self.df
        total_paid = len(paid)

        rows = []
        for age in BENEFIT_AGES:
            if paid.empty:
                matched = paid
            else:
                matched = _select(paid, [
                    exact_age_eligibility(y, self.years, age) for y in paid["birth_year"]
                ])
            count = len(matched)
            male = int((matched["sex"] == "Male").sum()) if count else 0
            female = int((matched["sex"] == "Female").sum()) if count else 0
            cash_gift = cash_amount_for_age(age)

            rows.append({
                "age": age,
                "count": count,
                "maleCount": male,
                "femaleCount": female,
                "malePercentage": percentage(male, count),
                "femalePercentage": percentage(female, count),
                "percentage": percentage(count, total_paid),
                "cashGift": cash_gift,
                "totalAmount": cash_gift * count,
            })
        return rows

    def build_report(
        self,
        provinces: Iterable[Any],
        lgus: Optional[Iterable[Any]] = None,
    ) -> Dict[str, Any]:
        """Every table at once, in the AggregateReport shape."""
        lgu_stats = []
        if self.criteria.province_code and lgus is not None:
            lgu_stats = self.by_lgu(lgus)

        return {
            "totalCitizens": self.total,
            "byStatus": self.by_status(),
            "bySex": self.by_sex(),
            "byAge": self.by_age_tier(),
            "byMonth": self.by_birth_month(),
            "byQuarter": self.by_birth_quarter(),
            "paymentStats": self.payment_stats(),
            "provinceStats": self.by_province(provinces),
            "lguStats": lgu_stats,
            "paidByAge": self.paid_by_specific_age(),
            "filters": self.criteria.model_dump(mode="json"),
        }
