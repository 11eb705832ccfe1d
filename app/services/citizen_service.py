"""
Citizen service - business logic for the citizen registry.
"""
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func, or_
from app.config import settings
from app.models.citizen import Citizen
from app.schemas.citizen import CitizenCreate, CitizenStatusUpdate
from app.schemas.dashboard import FilterCriteria
from app.services.access_control import AccessScope
from app.services.audit import log_audit
from app.services.duplicate_detector import find_duplicates
from app.services.eligibility import eligibility, calendar_year_for
from app.services.geography_service import GeographyService
from app.utils.date_utils import validate_birth_date
from typing import List, Optional, Dict, Any, Tuple
from datetime import date, datetime, time, timedelta

logger = logging.getLogger(__name__)

PAID_STATUS = "Paid"


class CitizenService:
    """Business logic for citizen registration, listing and status changes."""

    def __init__(self, db: Session):
        self.db = db

    def list_citizens(
        self,
        scope: AccessScope,
        page: int = 1,
        page_size: int = 50,
        search: Optional[str] = None,
        statuses: Optional[List[str]] = None,
        province_code: Optional[str] = None,
        lgu_code: Optional[str] = None,
        barangay_code: Optional[str] = None
    ) -> Tuple[List[Citizen], int]:
        """
        Get a page of citizens visible to the caller.

        Args:
            scope: Caller's access scope
            page: 1-indexed page number
            page_size: Rows per page
            search: Case-insensitive match on last/first name or OSCA ID
            statuses: Filter by status set
            province_code: Filter by province
            lgu_code: Filter by LGU
            barangay_code: Filter by barangay

        Returns:
            Tuple of (citizens on the page, total matching rows)
        """
        query = scope.apply(self.db.query(Citizen))

        if search:
            pattern = f"%{search.strip().lower()}%"
            query = query.filter(or_(
                func.lower(Citizen.last_name).like(pattern),
                func.lower(Citizen.first_name).like(pattern),
                func.lower(Citizen.osca_id).like(pattern),
            ))
        if statuses:
            query = query.filter(Citizen.status.in_(statuses))
        if province_code:
            query = query.filter(Citizen.province_code == province_code)
        if lgu_code:
            query = query.filter(Citizen.lgu_code == lgu_code)
        if barangay_code:
            query = query.filter(Citizen.barangay_code == barangay_code)

        total = query.count()
        citizens = query.order_by(
            Citizen.last_name, Citizen.first_name, Citizen.id
        ).offset((page - 1) * page_size).limit(page_size).all()

        return citizens, total

    def get_citizen(self, citizen_id: int, scope: AccessScope) -> Optional[Citizen]:
        """
        Get one citizen.

        Raises:
            PermissionError: if the citizen is outside the caller's scope
        """
        citizen = self.db.query(Citizen).filter(Citizen.id == citizen_id).first()
        if citizen is None:
            return None
        scope.require(citizen.province_code, citizen.lgu_code)
        return citizen

    def create_citizen(self, data: CitizenCreate, scope: AccessScope) -> Citizen:
        """
        Register a citizen as Encoded.

        Raises:
            ValueError: future birth date or inconsistent geography
            PermissionError: location outside the caller's scope
        """
        is_valid, error_msg = validate_birth_date(data.birth_date)
        if not is_valid:
            raise ValueError(error_msg)

        is_valid, error_msg = GeographyService(self.db).validate_hierarchy(
            data.province_code, data.lgu_code, data.barangay_code
        )
        if not is_valid:
            raise ValueError(error_msg)

        scope.require(data.province_code, data.lgu_code)

        citizen = Citizen(
            **data.model_dump(exclude={"sex"}),
            sex=data.sex.value,
            status="Encoded",
            encoded_by=scope.staff_id,
        )
        self.db.add(citizen)
        self.db.flush()

        log_audit(
            self.db,
            action="create_citizen",
            table_name="citizens",
            record_id=citizen.id,
            staff_id=scope.staff_id,
            details={"calendar_year": calendar_year_for(citizen.birth_date)},
        )
        self.db.commit()
        self.db.refresh(citizen)

        logger.info(f"Citizen {citizen.id} encoded by {scope.staff_id}")
        return citizen

    def update_status(
        self,
        citizen_id: int,
        update: CitizenStatusUpdate,
        scope: AccessScope,
        today: Optional[date] = None
    ) -> Optional[Citizen]:
        """
        Move a citizen to a new status.

        Moving to Paid without a payment date stamps today's date.
        """
        citizen = self.get_citizen(citizen_id, scope)
        if citizen is None:
            return None

        old_status = citizen.status
        new_status = update.status.value

        citizen.status = new_status
        if update.payment_date is not None:
            citizen.payment_date = update.payment_date
        elif new_status == PAID_STATUS and citizen.payment_date is None:
            citizen.payment_date = today or date.today()
        if update.validator is not None:
            citizen.validator = update.validator
        if update.validation_date is not None:
            citizen.validation_date = update.validation_date
        if update.remarks is not None:
            citizen.remarks = update.remarks

        log_audit(
            self.db,
            action="update_status",
            table_name="citizens",
            record_id=citizen.id,
            staff_id=scope.staff_id,
            details={
                "from": old_status,
                "to": new_status,
                "payment_date": citizen.payment_date.isoformat() if citizen.payment_date else None,
            },
        )
        self.db.commit()
        self.db.refresh(citizen)

        logger.info(f"Citizen {citizen.id} moved {old_status} -> {new_status} by {scope.staff_id}")
        return citizen

    def get_eligibility(self, citizen: Citizen, calendar_years: List[int]) -> Dict[str, Any]:
        result = eligibility(citizen.birth_date, calendar_years).to_dict()
        result["calendar_year"] = citizen.calendar_year
        return result

    def load_records(self, criteria: FilterCriteria, scope: AccessScope) -> List[Dict[str, Any]]:
        """
        Fetch citizen records for aggregation.

        Registration date, payment date, geography and status filters run in
        SQL; calendar-year and age filters need the eligibility rules and are
        left to the aggregation engine.
        """
        query = scope.apply(self.db.query(Citizen))

        if criteria.start_date is not None:
            query = query.filter(Citizen.created_at >= datetime.combine(criteria.start_date, time.min))
        if criteria.end_date is not None:
            query = query.filter(
                Citizen.created_at < datetime.combine(criteria.end_date + timedelta(days=1), time.min)
            )
        if criteria.payment_date_start is not None:
            query = query.filter(Citizen.payment_date >= criteria.payment_date_start)
        if criteria.payment_date_end is not None:
            query = query.filter(Citizen.payment_date <= criteria.payment_date_end)
        if criteria.province_code:
            query = query.filter(Citizen.province_code == criteria.province_code)
        if criteria.lgu_code:
            query = query.filter(Citizen.lgu_code == criteria.lgu_code)
        if criteria.barangay_code:
            query = query.filter(Citizen.barangay_code == criteria.barangay_code)
        if criteria.statuses:
            query = query.filter(Citizen.status.in_(criteria.statuses))

        return [c.to_record() for c in query.all()]

    def find_duplicates(
        self,
        scope: AccessScope,
        min_confidence: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Compare Encoded citizens against every non-Encoded citizen in scope.
        """
        if min_confidence is None:
            min_confidence = settings.DUPLICATE_MIN_CONFIDENCE

        base = scope.apply(self.db.query(Citizen))
        encoded = base.filter(Citizen.status == "Encoded").all()
        existing = base.filter(Citizen.status != "Encoded").all()

        matches = find_duplicates(encoded, existing, min_confidence)

        names = {c.id: c.full_name for c in encoded + existing}
        for match in matches:
            match["citizen_name"] = names.get(match["citizen_id"])
            match["match_name"] = names.get(match["match_id"])

        logger.info(
            f"Duplicate check: {len(encoded)} encoded vs {len(existing)} existing, "
            f"{len(matches)} matches >= {min_confidence}"
        )
        return matches
