"""
Audit log model.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, func
from app.database import Base


class AuditLog(Base):
    """One row per write action performed by a staff member."""
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now(), index=True)
    staff_id = Column(String(36), index=True)
    action = Column(String(50), nullable=False)
    table_name = Column(String(50))
    record_id = Column(String(50))
    details = Column(JSON)

    def __repr__(self):
        return f"<AuditLog(id={self.id}, action={self.action}, record={self.table_name}:{self.record_id})>"
