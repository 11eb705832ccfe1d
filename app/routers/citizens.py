"""
Citizen registry API endpoints.
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from app.config import settings
from app.database import get_db
from app.dependencies import get_access_scope
from app.schemas.citizen import CitizenCreate, CitizenRecord, CitizenStatusUpdate
from app.schemas.common import PaginatedResponse
from app.schemas.eca import EcaApplicationRecord
from app.services.access_control import AccessScope
from app.services.audit import get_history
from app.services.citizen_service import CitizenService
from app.services.eca_service import EcaService
from app.utils.date_utils import resolve_calendar_years, validate_calendar_years
from typing import List, Optional

router = APIRouter()


@router.get("")
def list_citizens(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = Query(None, description="Name or OSCA ID contains"),
    status: Optional[List[str]] = Query(None, description="Filter by status (repeatable)"),
    province_code: Optional[str] = Query(None, description="Filter by province"),
    lgu_code: Optional[str] = Query(None, description="Filter by LGU"),
    barangay_code: Optional[str] = Query(None, description="Filter by barangay"),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Get a page of citizens within the caller's assignments."""
    citizens, total = CitizenService(db).list_citizens(
        scope,
        page=page,
        page_size=page_size,
        search=search,
        statuses=status,
        province_code=province_code,
        lgu_code=lgu_code,
        barangay_code=barangay_code
    )
    data = [CitizenRecord.model_validate(c).model_dump(mode="json") for c in citizens]
    return PaginatedResponse.create(data, total, page, page_size)


@router.get("/duplicates")
def get_duplicates(
    min_confidence: Optional[int] = Query(None, ge=0, le=100, description="Minimum confidence score"),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """
    Possible duplicates: each Encoded citizen compared with every existing
    (non-Encoded) citizen, highest confidence first.
    """
    matches = CitizenService(db).find_duplicates(scope, min_confidence)
    return {
        "matches": matches,
        "total_count": len(matches),
        "min_confidence": min_confidence if min_confidence is not None else settings.DUPLICATE_MIN_CONFIDENCE
    }


@router.post("", status_code=201)
def create_citizen(
    payload: CitizenCreate,
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Register a new citizen with status Encoded."""
    try:
        citizen = CitizenService(db).create_citizen(payload, scope)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))

    return CitizenRecord.model_validate(citizen).model_dump(mode="json")


def _get_or_404(service: CitizenService, citizen_id: int, scope: AccessScope):
    try:
        citizen = service.get_citizen(citizen_id, scope)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    if citizen is None:
        raise HTTPException(status_code=404, detail=f"Citizen {citizen_id} not found")
    return citizen


@router.get("/{citizen_id}")
def get_citizen(
    citizen_id: int,
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Get one citizen."""
    citizen = _get_or_404(CitizenService(db), citizen_id, scope)
    return CitizenRecord.model_validate(citizen).model_dump(mode="json")


@router.patch("/{citizen_id}/status")
def update_citizen_status(
    citizen_id: int,
    payload: CitizenStatusUpdate,
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Move a citizen to another workflow status."""
    service = CitizenService(db)
    _get_or_404(service, citizen_id, scope)

    citizen = service.update_status(citizen_id, payload, scope)
    return CitizenRecord.model_validate(citizen).model_dump(mode="json")


@router.get("/{citizen_id}/eligibility")
def get_citizen_eligibility(
    citizen_id: int,
    calendar_years: Optional[List[int]] = Query(None, description="Target calendar years (repeatable)"),
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Qualifying age and cash amount for a citizen across the selected years."""
    service = CitizenService(db)
    citizen = _get_or_404(service, citizen_id, scope)

    years = resolve_calendar_years(calendar_years)
    is_valid, error_msg = validate_calendar_years(years)
    if not is_valid:
        raise HTTPException(status_code=400, detail=error_msg)

    return {"citizen_id": citizen.id, **service.get_eligibility(citizen, years)}


@router.get("/{citizen_id}/history")
def get_citizen_history(
    citizen_id: int,
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """Audit entries for a citizen, newest first."""
    _get_or_404(CitizenService(db), citizen_id, scope)
    history = get_history(db, "citizens", citizen_id)
    return {"citizen_id": citizen_id, "history": history, "count": len(history)}


@router.get("/{citizen_id}/eca")
def get_citizen_eca_history(
    citizen_id: int,
    scope: AccessScope = Depends(get_access_scope),
    db: Session = Depends(get_db)
):
    """ECA applications of a citizen with the age at which each was received, newest first."""
    _get_or_404(CitizenService(db), citizen_id, scope)
    applications = EcaService(db).get_citizen_history(citizen_id)
    history = [EcaApplicationRecord.model_validate(a).model_dump(mode="json") for a in applications]
    return {
        "citizen_id": citizen_id,
        "applications": history,
        "count": len(history),
        "total_amount": sum(a.cash_amount for a in applications),
    }
