"""
Utils package initialization.
"""
from app.utils.date_utils import (
    parse_date_string,
    validate_birth_date,
    validate_calendar_years,
    validate_date_range,
    resolve_calendar_years,
)
from app.utils.aggregators import (
    percentage,
    count_by,
    zero_filled_counts,
    pivot_status_counts,
)
from app.utils.constants import (
    CITIZEN_STATUSES,
    SEXES,
    BENEFIT_AGES,
    MONTH_NAMES,
)

__all__ = [
    "parse_date_string",
    "validate_birth_date",
    "validate_calendar_years",
    "validate_date_range",
    "resolve_calendar_years",
    "percentage",
    "count_by",
    "zero_filled_counts",
    "pivot_status_counts",
    "CITIZEN_STATUSES",
    "SEXES",
    "BENEFIT_AGES",
    "MONTH_NAMES",
]
