"""
ECA application service - generates and tracks cash-gift applications.

A citizen qualifies for an application in a year when they turn exactly one
of the milestone ages (80, 85, 90, 95, 100) that year. Each milestone type is
a lifetime benefit: once an application of that type exists, later runs skip it.
"""
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from app.config import settings
from app.models.citizen import Citizen
from app.models.eca_application import EcaApplication
from app.schemas.eca import EcaStatusUpdate
from app.services.access_control import AccessScope
from app.services.audit import log_audit
from app.services.eligibility import cash_amount_for_age, exact_age_eligibility
from app.utils.constants import BENEFIT_AGES, ECA_APPLICANT_STATUSES, ECA_FIRST_YEAR, ECA_TYPES
from typing import List, Optional, Dict, Any, Tuple
from datetime import date

logger = logging.getLogger(__name__)

PAID_STATUS = "Paid"


def eca_type_for_age(age: int) -> Optional[str]:
    """Application type for an exact milestone age, or None for any other age."""
    return ECA_TYPES.get(age)


def validate_eca_year(year: int) -> Tuple[bool, Optional[str]]:
    if year < ECA_FIRST_YEAR or year > settings.MAX_CALENDAR_YEAR:
        return False, f"ECA year must be between {ECA_FIRST_YEAR} and {settings.MAX_CALENDAR_YEAR}"
    return True, None


class EcaService:
    """Business logic for ECA application generation, listing and payment."""

    def __init__(self, db: Session):
        self.db = db

    def _scoped(self, query):
        """Join applications to their citizen so AccessScope can filter on geography."""
        return query.join(Citizen, EcaApplication.citizen_id == Citizen.id)

    def get_eligible_citizens(self, target_year: int, scope: AccessScope) -> List[Dict[str, Any]]:
        """
        Citizens who turn a milestone age in target_year and have not yet
        received that milestone's application.

        Args:
            target_year: ECA year to check
            scope: Caller's access scope

        Returns:
            One dict per eligible citizen with qualifying age, type and amount

        Raises:
            ValueError: target_year outside the supported range
        """
        is_valid, error_msg = validate_eca_year(target_year)
        if not is_valid:
            raise ValueError(error_msg)

        earliest = date(target_year - max(BENEFIT_AGES), 1, 1)
        latest = date(target_year - min(BENEFIT_AGES), 12, 31)

        citizens = scope.apply(self.db.query(Citizen)).filter(
            Citizen.status.in_(ECA_APPLICANT_STATUSES),
            Citizen.birth_date >= earliest,
            Citizen.birth_date <= latest,
        ).order_by(Citizen.id).all()

        received = {
            (citizen_id, eca_type)
            for citizen_id, eca_type in self._scoped(
                self.db.query(EcaApplication.citizen_id, EcaApplication.eca_type)
            ).filter(Citizen.birth_date >= earliest, Citizen.birth_date <= latest).all()
        }

        eligible = []
        for citizen in citizens:
            for age in BENEFIT_AGES:
                if not exact_age_eligibility(citizen.birth_date, [target_year], age):
                    continue
                eca_type = eca_type_for_age(age)
                if (citizen.id, eca_type) not in received:
                    eligible.append({
                        "citizen_id": citizen.id,
                        "full_name": citizen.full_name,
                        "birth_date": citizen.birth_date,
                        "qualifying_age": age,
                        "eca_type": eca_type,
                        "cash_amount": cash_amount_for_age(age),
                        "eca_year": target_year,
                    })
                break

        return eligible

    def generate_applications(self, target_year: int, scope: AccessScope) -> int:
        """
        Create an Applied application for every eligible citizen.

        Returns:
            Number of applications created (0 when everyone already has one)
        """
        eligible = self.get_eligible_citizens(target_year, scope)

        self.db.add_all([
            EcaApplication(
                citizen_id=item["citizen_id"],
                eca_year=target_year,
                birth_date=item["birth_date"],
                eca_type=item["eca_type"],
                eca_status="Applied",
                cash_amount=item["cash_amount"],
                created_by=scope.staff_id,
            )
            for item in eligible
        ])
        log_audit(
            self.db,
            action="generate_eca_applications",
            table_name="eca_applications",
            staff_id=scope.staff_id,
            details={"eca_year": target_year, "created": len(eligible)},
        )
        self.db.commit()

        logger.info(f"Generated {len(eligible)} ECA applications for {target_year} by {scope.staff_id}")
        return len(eligible)

    def list_applications(
        self,
        scope: AccessScope,
        page: int = 1,
        page_size: int = 50,
        eca_year: Optional[int] = None,
        eca_type: Optional[str] = None,
        eca_status: Optional[str] = None
    ) -> Tuple[List[EcaApplication], int]:
        """Get a page of applications visible to the caller, newest year first."""
        query = scope.apply(self._scoped(self.db.query(EcaApplication)))

        if eca_year is not None:
            query = query.filter(EcaApplication.eca_year == eca_year)
        if eca_type:
            query = query.filter(EcaApplication.eca_type == eca_type)
        if eca_status:
            query = query.filter(EcaApplication.eca_status == eca_status)

        total = query.count()
        applications = query.order_by(
            EcaApplication.eca_year.desc(), EcaApplication.id
        ).offset((page - 1) * page_size).limit(page_size).all()

        return applications, total

    def get_application(self, eca_id: int, scope: AccessScope) -> Optional[EcaApplication]:
        """
        Get one application.

        Raises:
            PermissionError: if the applicant is outside the caller's scope
        """
        row = self._scoped(
            self.db.query(EcaApplication, Citizen.province_code, Citizen.lgu_code)
        ).filter(EcaApplication.id == eca_id).first()
        if row is None:
            return None
        application, province_code, lgu_code = row
        scope.require(province_code, lgu_code)
        return application

    def update_status(
        self,
        eca_id: int,
        update: EcaStatusUpdate,
        scope: AccessScope,
        today: Optional[date] = None
    ) -> Optional[EcaApplication]:
        """
        Move an application to a new status.

        Moving to Paid without a payment date stamps today's date.
        """
        application = self.get_application(eca_id, scope)
        if application is None:
            return None

        old_status = application.eca_status
        new_status = update.eca_status.value

        application.eca_status = new_status
        application.updated_by = scope.staff_id
        if update.payment_date is not None:
            application.payment_date = update.payment_date
        elif new_status == PAID_STATUS and application.payment_date is None:
            application.payment_date = today or date.today()
        if update.remarks is not None:
            application.remarks = update.remarks

        log_audit(
            self.db,
            action="update_eca_status",
            table_name="eca_applications",
            record_id=application.id,
            staff_id=scope.staff_id,
            details={"from": old_status, "to": new_status, "citizen_id": application.citizen_id},
        )
        self.db.commit()
        self.db.refresh(application)

        logger.info(f"ECA application {application.id} moved {old_status} -> {new_status} by {scope.staff_id}")
        return application

    def get_statistics(self, scope: AccessScope, eca_year: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Application counts and cash totals per (year, type, status).

        Ordered by year (newest first), then type, then status.
        """
        query = scope.apply(self._scoped(self.db.query(
            EcaApplication.eca_year,
            EcaApplication.eca_type,
            EcaApplication.eca_status,
            func.count(EcaApplication.id),
            func.sum(EcaApplication.cash_amount),
        )))
        if eca_year is not None:
            query = query.filter(EcaApplication.eca_year == eca_year)

        rows = query.group_by(
            EcaApplication.eca_year, EcaApplication.eca_type, EcaApplication.eca_status
        ).order_by(
            EcaApplication.eca_year.desc(), EcaApplication.eca_type, EcaApplication.eca_status
        ).all()

        return [{
            "eca_year": year,
            "eca_type": eca_type,
            "eca_status": status,
            "application_count": int(count),
            "total_amount": int(total or 0),
            "average_amount": (total or 0) / count if count else 0,
        } for year, eca_type, status, count, total in rows]

    def get_citizen_history(self, citizen_id: int) -> List[EcaApplication]:
        """Every application of one citizen, newest year first."""
        return self.db.query(EcaApplication).filter(
            EcaApplication.citizen_id == citizen_id
        ).order_by(EcaApplication.eca_year.desc(), EcaApplication.id.desc()).all()
