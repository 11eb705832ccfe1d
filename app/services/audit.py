"""
Audit trail helpers.
"""
from sqlalchemy.orm import Session
from app.models.audit_log import AuditLog
from typing import Any, Dict, List, Optional


def log_audit(
    db: Session,
    action: str,
    table_name: Optional[str] = None,
    record_id: Optional[Any] = None,
    staff_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """
    Add an audit entry to the current transaction.
    The caller commits it together with the change it describes.
    """
    entry = AuditLog(
        action=action,
        table_name=table_name,
        record_id=str(record_id) if record_id is not None else None,
        staff_id=staff_id,
        details=details,
    )
    db.add(entry)
    return entry


def get_latest_entry(db: Session, table_name: str, record_id: Any) -> Optional[AuditLog]:
    """Most recent audit entry for a record, or None."""
    return db.query(AuditLog).filter(
        AuditLog.table_name == table_name,
        AuditLog.record_id == str(record_id)
    ).order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).first()


def get_history(db: Session, table_name: str, record_id: Any) -> List[Dict[str, Any]]:
    entries = db.query(AuditLog).filter(
        AuditLog.table_name == table_name,
        AuditLog.record_id == str(record_id)
    ).order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).all()

    return [{
        "id": e.id,
        "created_at": e.created_at.isoformat() if e.created_at else None,
        "staff_id": e.staff_id,
        "action": e.action,
        "details": e.details,
    } for e in entries]
