"""
ECA application API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.dependencies import get_access_scope
from app.schemas.common import PaginatedResponse
from app.schemas.eca import EcaApplicationRecord, EcaStatus, EcaStatusUpdate, EcaType
from app.services.access_control import AccessScope
from app.services.eca_service import EcaService
from typing import Optional

router = APIRouter()


def _record(application) -> dict:
    return EcaApplicationRecord.model_validate(application).model_dump(mode="json")


@router.get("/eligible")
def get_eligible_citizens(
    target_year: int = Query(..., description="ECA year to check"),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Citizens turning 80, 85, 90, 95 or 100 in the year without that milestone's application."""
    try:
        eligible = EcaService(db).get_eligible_citizens(target_year, scope)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "target_year": target_year,
        "citizens": eligible,
        "total_count": len(eligible),
        "total_amount": sum(item["cash_amount"] for item in eligible),
    }


@router.post("/generate", status_code=201)
def generate_applications(
    target_year: int = Query(..., description="ECA year to generate applications for"),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """
    Create an Applied application for every eligible citizen.
    Milestones a citizen already received are skipped.
    """
    try:
        created = EcaService(db).generate_applications(target_year, scope)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"target_year": target_year, "created": created}


@router.get("/statistics")
def get_statistics(
    eca_year: Optional[int] = Query(None, description="Restrict to one ECA year"),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Application counts and cash totals per year, type and status."""
    statistics = EcaService(db).get_statistics(scope, eca_year)
    return {"statistics": statistics, "total_count": len(statistics)}


@router.get("")
def list_applications(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    eca_year: Optional[int] = Query(None, description="Filter by ECA year"),
    eca_type: Optional[EcaType] = Query(None, description="Filter by milestone type"),
    eca_status: Optional[EcaStatus] = Query(None, description="Filter by application status"),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Get a page of ECA applications within the caller's assignments."""
    applications, total = EcaService(db).list_applications(
        scope,
        page=page,
        page_size=page_size,
        eca_year=eca_year,
        eca_type=eca_type.value if eca_type else None,
        eca_status=eca_status.value if eca_status else None
    )
    return PaginatedResponse.create([_record(a) for a in applications], total, page, page_size)


@router.patch("/{eca_id}/status")
def update_application_status(
    eca_id: int,
    payload: EcaStatusUpdate,
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Move an ECA application to another status."""
    try:
        application = EcaService(db).update_status(eca_id, payload, scope)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if application is None:
        raise HTTPException(status_code=404, detail=f"ECA application {eca_id} not found")

    return _record(application)
