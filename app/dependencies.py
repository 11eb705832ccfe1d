"""
Shared FastAPI dependencies: caller scope and dashboard filters.
"""
from fastapi import Depends, Header, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.dashboard import FilterCriteria
from app.services.access_control import AccessScope, scope_for_staff_id
from app.utils.date_utils import (
    resolve_calendar_years,
    validate_calendar_years,
    validate_date_range,
)
from datetime import date
from typing import List, Optional


def get_access_scope(
    x_staff_id: Optional[str] = Header(None, description="Calling staff member's ID"),
    db: Session = Depends(get_db)
) -> AccessScope:
    """Resolve the caller's province/LGU visibility from the X-Staff-Id header."""
    if not x_staff_id:
        raise HTTPException(status_code=401, detail="X-Staff-Id header is required")

    scope = scope_for_staff_id(db, x_staff_id)
    if scope is None:
        raise HTTPException(status_code=401, detail="Unknown or inactive staff member")
    return scope


def get_filter_criteria(
    start_date: Optional[date] = Query(None, description="Registration date from"),
    end_date: Optional[date] = Query(None, description="Registration date to"),
    payment_date_start: Optional[date] = Query(None, description="Payment date from"),
    payment_date_end: Optional[date] = Query(None, description="Payment date to"),
    province_code: Optional[str] = Query(None, description="Filter by province code"),
    lgu_code: Optional[str] = Query(None, description="Filter by LGU code"),
    barangay_code: Optional[str] = Query(None, description="Filter by barangay code"),
    status: Optional[List[str]] = Query(None, description="Statuses to include (repeatable)"),
    age_start: Optional[int] = Query(None, ge=0, description="Minimum age in any selected year"),
    age_end: Optional[int] = Query(None, ge=0, description="Maximum age in any selected year"),
    calendar_years: Optional[List[int]] = Query(None, description="Target calendar years (repeatable)"),
) -> FilterCriteria:
    """
    Build FilterCriteria from query parameters.

    With no calendar_years the configured default window is used; the first
    year given is the reference year for age tiers.
    """
    years = resolve_calendar_years(calendar_years)
    is_valid, error_msg = validate_calendar_years(years)
    if not is_valid:
        raise HTTPException(status_code=400, detail=error_msg)

    for label, start, end in [
        ("Registration date", start_date, end_date),
        ("Payment date", payment_date_start, payment_date_end),
    ]:
        is_valid, error_msg = validate_date_range(start, end, label)
        if not is_valid:
            raise HTTPException(status_code=400, detail=error_msg)

    try:
        return FilterCriteria(
            start_date=start_date,
            end_date=end_date,
            payment_date_start=payment_date_start,
            payment_date_end=payment_date_end,
            province_code=province_code,
            lgu_code=lgu_code,
            barangay_code=barangay_code,
            statuses=status or [],
            age_start=age_start,
            age_end=age_end,
            calendar_years=years,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=400,
            detail="; ".join(err["msg"] for err in e.errors())
        )
