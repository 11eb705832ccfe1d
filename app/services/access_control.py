"""
Access control - which citizen rows a staff member may see or change.

Administrators see everything. PDO and LGU users only see the provinces and
LGUs they are assigned to; with no assignments they see nothing.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sqlalchemy import and_, false, or_
from sqlalchemy.orm import Session

from app.models.citizen import Citizen
from app.models.staff import Staff
from app.utils.constants import ADMIN_POSITIONS

logger = logging.getLogger(__name__)


@dataclass
class AccessScope:
    """Province/LGU visibility of one caller."""
    staff_id: Optional[str] = None
    position: str = "Administrator"
    unrestricted: bool = False
    # (province_code, lgu_code); lgu_code None = whole province
    assignments: List[Tuple[str, Optional[str]]] = field(default_factory=list)

    @classmethod
    def for_staff(cls, staff: Staff) -> "AccessScope":
        if staff.position in ADMIN_POSITIONS:
            return cls(staff_id=staff.id, position=staff.position, unrestricted=True)

        assignments = [(a.province_code, a.lgu_code) for a in staff.assignments]
        return cls(
            staff_id=staff.id,
            position=staff.position,
            unrestricted=False,
            assignments=assignments,
        )

    @classmethod
    def system(cls) -> "AccessScope":
        """Scope for scripts and internal jobs."""
        return cls(staff_id=None, position="System", unrestricted=True)

    def can_view(self, province_code: str, lgu_code: Optional[str]) -> bool:
        if self.unrestricted:
            return True
        for assigned_province, assigned_lgu in self.assignments:
            if assigned_province != province_code:
                continue
            if assigned_lgu is None or assigned_lgu == lgu_code:
                return True
        return False

    def require(self, province_code: str, lgu_code: Optional[str]) -> None:
        """Raise PermissionError when the location is outside the scope."""
        if not self.can_view(province_code, lgu_code):
            logger.warning(
                f"Staff {self.staff_id} ({self.position}) denied access to "
                f"{province_code}/{lgu_code}"
            )
            raise PermissionError(
                f"Location {province_code}/{lgu_code} is outside your assignments"
            )

    def apply(self, query, model=Citizen):
        """Restrict a SQLAlchemy query on a model with province/LGU columns."""
        if self.unrestricted:
            return query
        if not self.assignments:
            return query.filter(false())

        conditions = []
        for province_code, lgu_code in self.assignments:
            if lgu_code is None:
                conditions.append(model.province_code == province_code)
            else:
                conditions.append(and_(
                    model.province_code == province_code,
                    model.lgu_code == lgu_code,
                ))
        return query.filter(or_(*conditions))


def scope_for_staff_id(db: Session, staff_id: str) -> Optional[AccessScope]:
    """Load the scope of an active staff member, or None if unknown/inactive."""
    staff = db.query(Staff).filter(Staff.id == staff_id).first()
    if staff is None or not staff.is_active:
        return None
    return AccessScope.for_staff(staff)
