"""
Models package initialization.
"""
from app.models.citizen import Citizen
from app.models.geography import Region, Province, Lgu, Barangay
from app.models.staff import Staff, StaffAssignment
from app.models.audit_log import AuditLog
from app.models.eca_application import EcaApplication

__all__ = [
    "Citizen",
    "Region",
    "Province",
    "Lgu",
    "Barangay",
    "Staff",
    "StaffAssignment",
    "AuditLog",
    "EcaApplication",
]
