"""
Citizen SQLAlchemy model.
Stores senior-citizen registrations with their geography and workflow status.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, Index, func
from app.database import Base


class Citizen(Base):
    """
    Citizen table model.

    One row per registered senior citizen. The eligibility calendar year is
    not stored; it is derived from birth_date on every read.
    """
    __tablename__ = "citizens"

    # Primary key
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Registration
    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)

    # Identity
    last_name = Column(String(100), nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100))
    extension_name = Column(String(20))
    birth_date = Column(Date, nullable=False, index=True)
    sex = Column(String(10), nullable=False)
    osca_id = Column(String(50))
    rrn = Column(String(50))

    # Geography
    province_code = Column(String(20), nullable=False, index=True)
    lgu_code = Column(String(20), nullable=False, index=True)
    barangay_code = Column(String(20), nullable=False, index=True)

    # Workflow
    status = Column(String(20), nullable=False, default="Encoded", index=True)
    payment_date = Column(Date, index=True)
    validator = Column(String(100))
    validation_date = Column(Date)
    encoded_by = Column(String(50))
    remarks = Column(Text)

    # Composite indexes for common dashboard queries
    __table_args__ = (
        Index('idx_citizen_province_lgu', 'province_code', 'lgu_code'),
        Index('idx_citizen_status_province', 'status', 'province_code'),
    )

    def __repr__(self):
        return f"<Citizen(id={self.id}, last_name={self.last_name}, status={self.status})>"

    @property
    def calendar_year(self) -> int:
        """Canonical eligibility year, recomputed from birth_date."""
        from app.services.eligibility import calendar_year_for
        return calendar_year_for(self.birth_date)

    @property
    def full_name(self) -> str:
        parts = [self.last_name + ",", self.first_name, self.middle_name or "", self.extension_name or ""]
        return " ".join(p for p in parts if p).strip()

    def to_record(self) -> dict:
        """Flat dict consumed by the aggregation engine."""
        return {
            "id": self.id,
            "created_at": self.created_at,
            "birth_date": self.birth_date,
            "sex": self.sex,
            "status": self.status,
            "province_code": self.province_code,
            "lgu_code": self.lgu_code,
            "barangay_code": self.barangay_code,
            "payment_date": self.payment_date,
        }
