"""
Eligibility calculator - ECA benefit-year and cash-gift rules.

Pure functions only: nothing here touches the database, so the same rules
serve the citizen model, the aggregation engine and the API.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Union

from app.config import settings
from app.utils.constants import (
    AGE_TIERS,
    BENEFIT_AGES,
    CALENDAR_YEAR_BY_LAST_DIGIT,
    CENTENARIAN_AGE,
    CENTENARIAN_CUTOFF_BIRTH_YEAR,
)

BirthDate = Union[date, int]


@dataclass
class EligibilityResult:
    """Eligibility of one citizen across a set of target years."""
    birth_year: int
    target_years: List[int] = field(default_factory=list)
    qualifying_age: int = 0
    tier: Optional[str] = None
    eligible: bool = False
    cash_amount: int = 0

    def to_dict(self) -> dict:
        return {
            "birth_year": self.birth_year,
            "target_years": self.target_years,
            "qualifying_age": self.qualifying_age,
            "tier": self.tier,
            "eligible": self.eligible,
            "cash_amount": self.cash_amount,
        }


def birth_year_of(birth_date: BirthDate) -> int:
    """Accept either a date or a bare birth year (int or numpy integer)."""
    if hasattr(birth_date, "year"):
        return birth_date.year
    return int(birth_date)


def calendar_year_for(birth_date: BirthDate) -> int:
    """
    Canonical eligibility year for a birth date.

    Births up to 1928 land on their 100th birthday year. Later births are
    grouped into 5-year cohorts by last digit so that, within 2024-2028,
    each cohort turns exactly one of 80, 85, 90, 95 or 100.

    Args:
        birth_date: Birth date or birth year

    Returns:
        Calendar year the citizen is bucketed into
    """
    birth_year = birth_year_of(birth_date)

    if birth_year <= CENTENARIAN_CUTOFF_BIRTH_YEAR:
        return birth_year + CENTENARIAN_AGE

    return CALENDAR_YEAR_BY_LAST_DIGIT[birth_year % 10]


def age_in_year(birth_date: BirthDate, year: int) -> int:
    """Age reached during a calendar year (year - birth year)."""
    return year - birth_year_of(birth_date)


def benefit_tier_for_age(age: int) -> Optional[int]:
    """Highest milestone age (80, 85, 90, 95, 100) reached, or None below 80."""
    reached = [milestone for milestone in BENEFIT_AGES if age >= milestone]
    return reached[-1] if reached else None


def cash_amount_for_age(age: int) -> int:
    """Cash gift for a qualifying age: 100k at 100+, 10k at 80+, else 0."""
    tier = benefit_tier_for_age(age)
    if tier is None:
        return 0
    if tier == CENTENARIAN_AGE:
        return settings.CENTENARIAN_CASH_GIFT
    return settings.MILESTONE_CASH_GIFT


def age_tier_label(age: int) -> Optional[str]:
    """
    Tier label for an age: the bucket floor ("80".."95") or "100+".
    Returns None below 80.
    """
    for low, high, label in AGE_TIERS:
        if age >= low and (high is None or age <= high):
            return label
    return None


def reference_year(target_years: Optional[Iterable[int]] = None) -> int:
    """First selected year, or the current year when none are selected."""
    if target_years:
        for year in target_years:
            return year
    return date.today().year


def eligibility(birth_date: BirthDate, target_years: Iterable[int]) -> EligibilityResult:
    """
    Compute eligibility across a set of target years.

    The qualifying age is the highest age reached in any of the years, and
    the cash amount is credited once at that age (never per year).

    Args:
        birth_date: Birth date or birth year
        target_years: Non-empty collection of calendar years

    Returns:
        EligibilityResult

    Raises:
        ValueError: if target_years is empty
    """
    years = list(target_years)
    if not years:
        raise ValueError("target_years must contain at least one calendar year")

    birth_year = birth_year_of(birth_date)
    qualifying_age = max(age_in_year(birth_year, y) for y in years)
    amount = cash_amount_for_age(qualifying_age)

    return EligibilityResult(
        birth_year=birth_year,
        target_years=years,
        qualifying_age=qualifying_age,
        tier=age_tier_label(qualifying_age),
        eligible=amount > 0,
        cash_amount=amount,
    )


def exact_age_eligibility(
    birth_date: BirthDate,
    target_years: Optional[Iterable[int]],
    exact_age: int,
) -> bool:
    """
    True if any target year yields exactly exact_age.
    Without target years, only the reference year is checked.
    """
    years = list(target_years) if target_years else [reference_year(target_years)]
    return any(age_in_year(birth_date, y) == exact_age for y in years)


def age_in_range(
    birth_date: BirthDate,
    target_years: Iterable[int],
    age_start: Optional[int] = None,
    age_end: Optional[int] = None,
) -> bool:
    """True if the age in any target year falls within [age_start, age_end]."""
    for year in target_years:
        age = age_in_year(birth_date, year)
        if age_start is not None and age < age_start:
            continue
        if age_end is not None and age > age_end:
            continue
        return True
    return False
