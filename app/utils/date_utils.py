"""
Date utility functions for birth dates, filter ranges and calendar years.
"""
from datetime import date, datetime
from typing import Iterable, List, Optional, Tuple
from app.config import settings


def parse_date_string(date_str: str) -> Optional[date]:
    """
    Parse date string to date object.
    Handles multiple formats.

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date or None if invalid
    """
    if date_str is None:
        return None

    # Try multiple formats
    formats = [
        "%Y-%m-%d",  # YYYY-MM-DD (ISO format)
        "%m/%d/%Y",  # MM/DD/YYYY (encoder spreadsheets)
        "%d-%m-%Y",  # DD-MM-YYYY
        "%Y/%m/%d",  # YYYY/MM/DD
    ]

    for fmt in formats:
        try:
            return datetime.strptime(str(date_str).strip(), fmt).date()
        except ValueError:
            continue

    return None


def to_date(value) -> Optional[date]:
    """Reduce a datetime to its date part; pass dates and None through."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    return value


def birth_quarter(month: int) -> int:
    """Calendar quarter (1-4) of a month number."""
    return (month - 1) // 3 + 1


def validate_birth_date(birth_date: date, today: Optional[date] = None) -> Tuple[bool, str]:
    """
    Validate a birth date at ingestion.

    Returns:
        Tuple of (is_valid, error_message)
    """
    today = today or date.today()

    if birth_date > today:
        return False, f"Birth date {birth_date} is in the future"

    if birth_date.year < settings.MIN_CALENDAR_YEAR:
        return False, f"Birth date {birth_date} is before {settings.MIN_CALENDAR_YEAR}"

    return True, ""


def validate_calendar_years(years: Iterable[int]) -> Tuple[bool, str]:
    """
    Validate a set of target calendar years.

    Returns:
        Tuple of (is_valid, error_message)
    """
    years = list(years)
    if not years:
        return False, "At least one calendar year is required"

    for year in years:
        if year < settings.MIN_CALENDAR_YEAR or year > settings.MAX_CALENDAR_YEAR:
            return False, (
                f"Calendar year {year} is outside "
                f"{settings.MIN_CALENDAR_YEAR}-{settings.MAX_CALENDAR_YEAR}"
            )

    return True, ""


def validate_date_range(start: Optional[date], end: Optional[date], label: str = "date") -> Tuple[bool, str]:
    """Check that an optional [start, end] range is not inverted."""
    if start is not None and end is not None and start > end:
        return False, f"{label} range start {start} is after end {end}"
    return True, ""


def resolve_calendar_years(years: Optional[List[int]]) -> List[int]:
    """Use the configured default window when no years were selected."""
    if not years:
        return list(settings.DEFAULT_CALENDAR_YEARS)
    # Preserve caller order: the first year is the age-tier reference year
    seen = []
    for year in years:
        if year not in seen:
            seen.append(year)
    return seen
