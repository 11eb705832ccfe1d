"""
Geography service - cascading province/LGU/barangay reference lookups.
"""
from sqlalchemy.orm import Session
from app.models.geography import Region, Province, Lgu, Barangay
from typing import List, Optional, Dict, Tuple


class GeographyService:
    """Reference data for the region -> province -> LGU -> barangay hierarchy."""

    def __init__(self, db: Session):
        self.db = db

    def get_regions(self) -> List[Dict[str, str]]:
        regions = self.db.query(Region).order_by(Region.name).all()
        return [{"code": r.code, "name": r.name} for r in regions]

    def get_provinces(self, region_code: Optional[str] = None) -> List[Dict[str, str]]:
        """Get provinces, optionally filtered by region."""
        query = self.db.query(Province)
        if region_code:
            query = query.filter(Province.region_code == region_code)
        return [{"code": p.code, "name": p.name} for p in query.order_by(Province.name).all()]

    def get_lgus(self, province_code: Optional[str] = None) -> List[Dict[str, str]]:
        """Get LGUs, optionally filtered by province."""
        query = self.db.query(Lgu)
        if province_code:
            query = query.filter(Lgu.province_code == province_code)
        return [{"code": l.code, "name": l.name} for l in query.order_by(Lgu.name).all()]

    def get_barangays(
        self,
        lgu_code: Optional[str] = None,
        province_code: Optional[str] = None
    ) -> List[Dict[str, str]]:
        """Get barangays, optionally filtered by LGU and/or province."""
        query = self.db.query(Barangay)
        if province_code:
            query = query.filter(Barangay.province_code == province_code)
        if lgu_code:
            query = query.filter(Barangay.lgu_code == lgu_code)
        return [{"code": b.code, "name": b.name} for b in query.order_by(Barangay.name).all()]

    def validate_hierarchy(
        self,
        province_code: str,
        lgu_code: str,
        barangay_code: str
    ) -> Tuple[bool, str]:
        """
        Check that the LGU belongs to the province and the barangay to the LGU.

        Returns:
            Tuple of (is_valid, error_message)
        """
        province = self.db.query(Province).filter(Province.code == province_code).first()
        if province is None:
            return False, f"Unknown province code {province_code}"

        lgu = self.db.query(Lgu).filter(Lgu.code == lgu_code).first()
        if lgu is None:
            return False, f"Unknown LGU code {lgu_code}"
        if lgu.province_code != province_code:
            return False, f"LGU {lgu_code} does not belong to province {province_code}"

        barangay = self.db.query(Barangay).filter(Barangay.code == barangay_code).first()
        if barangay is None:
            return False, f"Unknown barangay code {barangay_code}"
        if barangay.lgu_code != lgu_code:
            return False, f"Barangay {barangay_code} does not belong to LGU {lgu_code}"

        return True, ""
