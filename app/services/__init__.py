"""
Services package initialization.
"""
from app.services.eligibility import (
    EligibilityResult,
    calendar_year_for,
    eligibility,
    exact_age_eligibility,
    benefit_tier_for_age,
)
from app.services.aggregation import AggregationEngine
from app.services.access_control import AccessScope
from app.services.geography_service import GeographyService
from app.services.citizen_service import CitizenService
from app.services.dashboard_service import DashboardService
from app.services.eca_service import EcaService

__all__ = [
    "EligibilityResult",
    "calendar_year_for",
    "eligibility",
    "exact_age_eligibility",
    "benefit_tier_for_age",
    "AggregationEngine",
    "AccessScope",
    "GeographyService",
    "CitizenService",
    "DashboardService",
    "EcaService",
]
