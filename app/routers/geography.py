"""
Geography reference API endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.database import get_db
from app.services.geography_service import GeographyService
from typing import Optional

router = APIRouter()


@router.get("/regions")
def get_regions(db: Session = Depends(get_db)):
    """Get list of all regions."""
    regions = GeographyService(db).get_regions()
    return {"regions": regions, "count": len(regions)}


@router.get("/provinces")
def get_provinces(
    region_code: Optional[str] = Query(None, description="Filter by region"),
    db: Session = Depends(get_db)
):
    """Get list of provinces, optionally filtered by region."""
    provinces = GeographyService(db).get_provinces(region_code=region_code)
    return {"provinces": provinces, "count": len(provinces)}


@router.get("/lgus")
def get_lgus(
    province_code: Optional[str] = Query(None, description="Filter by province"),
    db: Session = Depends(get_db)
):
    """Get list of LGUs, optionally filtered by province."""
    lgus = GeographyService(db).get_lgus(province_code=province_code)
    return {"lgus": lgus, "count": len(lgus)}


@router.get("/barangays")
def get_barangays(
    lgu_code: Optional[str] = Query(None, description="Filter by LGU"),
    province_code: Optional[str] = Query(None, description="Filter by province"),
    db: Session = Depends(get_db)
):
    """Get list of barangays, optionally filtered by LGU and province."""
    barangays = GeographyService(db).get_barangays(lgu_code=lgu_code, province_code=province_code)
    return {"barangays": barangays, "count": len(barangays)}
