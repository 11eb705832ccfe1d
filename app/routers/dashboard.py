"""
Dashboard API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_access_scope, get_filter_criteria
from app.schemas.dashboard import AggregateReport, FilterCriteria
from app.services.access_control import AccessScope
from app.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/stats", response_model=AggregateReport)
def get_dashboard_stats(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """
    Get every dashboard table for the given filters.

    - **byStatus / bySex / byAge**: only buckets with citizens
    - **byMonth / byQuarter**: all buckets, zero-filled
    - **paymentStats**: count and cash total per status
    - **provinceStats**: every province, zero-filled
    - **lguStats**: every LGU of the selected province (empty without one)
    - **paidByAge**: paid citizens at exactly 80, 85, 90, 95 and 100
    """
    return DashboardService(db).get_report(criteria, scope)


@router.get("/status")
def get_status_counts(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Citizen counts by status and by sex."""
    engine = DashboardService(db).engine_for(criteria, scope)
    return {
        "totalCitizens": engine.total,
        "byStatus": engine.by_status(),
        "bySex": engine.by_sex(),
    }


@router.get("/sex")
def get_sex_counts(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Citizen counts by sex."""
    engine = DashboardService(db).engine_for(criteria, scope)
    return {"totalCitizens": engine.total, "bySex": engine.by_sex()}


@router.get("/age")
def get_age_distribution(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Citizen counts by age tier, measured in the first selected year."""
    engine = DashboardService(db).engine_for(criteria, scope)
    return {"byAge": engine.by_age_tier(), "referenceYear": criteria.calendar_years[0]}


@router.get("/birth-distribution")
def get_birth_distribution(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Citizen counts by birth month and birth quarter."""
    engine = DashboardService(db).engine_for(criteria, scope)
    return {"byMonth": engine.by_birth_month(), "byQuarter": engine.by_birth_quarter()}


@router.get("/payment")
def get_payment_stats(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Counts and cash-gift totals per status."""
    return DashboardService(db).engine_for(criteria, scope).payment_stats()


@router.get("/provinces")
def get_province_stats(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Per-status counts for every province."""
    provinces = DashboardService(db).get_province_stats(criteria, scope)
    return {"provinces": provinces, "total_count": len(provinces)}


@router.get("/lgus")
def get_lgu_stats(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Per-status counts for every LGU of the selected province."""
    lgus = DashboardService(db).get_lgu_stats(criteria, scope)
    return {"lgus": lgus, "total_count": len(lgus), "province_code": criteria.province_code}


@router.get("/paid-by-age")
def get_paid_by_age(
    criteria: FilterCriteria = Depends(get_filter_criteria),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Paid citizens at each milestone age, split by sex, with cash totals."""
    engine = DashboardService(db).engine_for(criteria, scope)
    return {"paidByAge": engine.paid_by_specific_age()}
