"""
Eligibility API endpoints.
"""
from fastapi import APIRouter, HTTPException, Query
from app.schemas.citizen import EligibilityResponse
from app.services.eligibility import age_in_year, calendar_year_for, eligibility
from app.utils.date_utils import resolve_calendar_years, validate_birth_date, validate_calendar_years
from datetime import date
from typing import List, Optional

router = APIRouter()


@router.get("/calendar-year")
def get_calendar_year(
    birth_date: date = Query(..., description="Birth date (YYYY-MM-DD)")
):
    """Canonical eligibility calendar year for a birth date."""
    is_valid, error_msg = validate_birth_date(birth_date)
    if not is_valid:
        raise HTTPException(status_code=400, detail=error_msg)

    year = calendar_year_for(birth_date)
    return {
        "birth_date": birth_date.isoformat(),
        "calendar_year": year,
        "age": age_in_year(birth_date, year),
    }


@router.get("", response_model=EligibilityResponse)
def get_eligibility(
    birth_date: date = Query(..., description="Birth date (YYYY-MM-DD)"),
    calendar_years: Optional[List[int]] = Query(None, description="Target calendar years (repeatable)")
):
    """
    Qualifying age, tier and cash amount across the selected years.

    The highest age reached in any selected year is credited once.
    """
    is_valid, error_msg = validate_birth_date(birth_date)
    if not is_valid:
        raise HTTPException(status_code=400, detail=error_msg)

    years = resolve_calendar_years(calendar_years)
    is_valid, error_msg = validate_calendar_years(years)
    if not is_valid:
        raise HTTPException(status_code=400, detail=error_msg)

    result = eligibility(birth_date, years).to_dict()
    result["calendar_year"] = calendar_year_for(birth_date)
    return result
