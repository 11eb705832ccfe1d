"""
Staff and staff-assignment models.
Assignments decide which provinces and LGUs a PDO or LGU user may see.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from app.database import Base


class Staff(Base):
    __tablename__ = "staff"

    id = Column(String(36), primary_key=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    username = Column(String(50), nullable=False, unique=True, index=True)
    email = Column(String(150))
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    middle_name = Column(String(100))
    birth_date = Column(Date)
    sex = Column(String(10))
    position = Column(String(20), nullable=False)  # Administrator, NCSC Admin, PDO, LGU
    status = Column(String(10), nullable=False, default="Active")

    assignments = relationship(
        "StaffAssignment",
        back_populates="staff",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Staff(id={self.id}, username={self.username}, position={self.position})>"

    @property
    def is_active(self) -> bool:
        return self.status == "Active"


class StaffAssignment(Base):
    """
    Binds a staff member to a province, optionally narrowed to one LGU.
    A null lgu_code means every LGU in the province.
    """
    __tablename__ = "staff_assignments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    staff_id = Column(String(36), ForeignKey("staff.id", ondelete="CASCADE"), nullable=False, index=True)
    province_code = Column(String(20), nullable=False)
    lgu_code = Column(String(20))
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    staff = relationship("Staff", back_populates="assignments")

    def __repr__(self):
        return f"<StaffAssignment(staff_id={self.staff_id}, province={self.province_code}, lgu={self.lgu_code})>"
