"""
ECA application SQLAlchemy model.
One row per cash-gift application; a citizen receives each milestone type at most once.
"""
from sqlalchemy import (
    Column, Integer, String, Date, DateTime, Text, ForeignKey, Index, UniqueConstraint, func
)
from app.database import Base


class EcaApplication(Base):
    __tablename__ = "eca_applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    citizen_id = Column(Integer, ForeignKey("citizens.id", ondelete="CASCADE"), nullable=False, index=True)
    eca_year = Column(Integer, nullable=False, index=True)
    birth_date = Column(Date, nullable=False)  # copied from the citizen at generation time
    eca_type = Column(String(20), nullable=False, index=True)
    eca_status = Column(String(20), nullable=False, default="Applied", index=True)
    payment_date = Column(Date, index=True)
    cash_amount = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, server_default=func.now(), onupdate=func.now())
    created_by = Column(String(36))
    updated_by = Column(String(36))
    remarks = Column(Text)

    __table_args__ = (
        UniqueConstraint('citizen_id', 'eca_type', name='uq_eca_citizen_type'),
        Index('idx_eca_year_type_status', 'eca_year', 'eca_type', 'eca_status'),
    )

    def __repr__(self):
        return f"<EcaApplication(id={self.id}, citizen={self.citizen_id}, type={self.eca_type}, year={self.eca_year})>"

    @property
    def age_when_received(self) -> int:
        return self.eca_year - self.birth_date.year
