"""
ECA application Pydantic schemas.
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import date, datetime
from enum import Enum


class EcaType(str, Enum):
    OCTOGENARIAN_80 = "octogenarian_80"
    OCTOGENARIAN_85 = "octogenarian_85"
    NONAGENARIAN_90 = "nonagenarian_90"
    NONAGENARIAN_95 = "nonagenarian_95"
    CENTENARIAN_100 = "centenarian_100"


class EcaStatus(str, Enum):
    APPLIED = "Applied"
    VALIDATED = "Validated"
    PAID = "Paid"
    UNPAID = "Unpaid"
    DISQUALIFIED = "Disqualified"


class EcaStatusUpdate(BaseModel):
    """Move an application to another status."""
    eca_status: EcaStatus
    payment_date: Optional[date] = None
    remarks: Optional[str] = None


class EcaApplicationRecord(BaseModel):
    """Single ECA application."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    citizen_id: int
    eca_year: int
    birth_date: date
    eca_type: str
    eca_status: str
    payment_date: Optional[date] = None
    cash_amount: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    remarks: Optional[str] = None
    age_when_received: int
