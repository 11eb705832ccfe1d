"""
Citizen Pydantic schemas for request/response validation.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from enum import Enum


class Sex(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


class CitizenStatus(str, Enum):
    ENCODED = "Encoded"
    VALIDATED = "Validated"
    CLEANLISTED = "Cleanlisted"
    WAITLISTED = "Waitlisted"
    PAID = "Paid"
    UNPAID = "Unpaid"
    COMPLIANCE = "Compliance"
    DISQUALIFIED = "Disqualified"


class CitizenCreate(BaseModel):
    """Payload for registering a citizen."""
    last_name: str = Field(..., min_length=1, max_length=100)
    first_name: str = Field(..., min_length=1, max_length=100)
    middle_name: Optional[str] = Field(None, max_length=100)
    extension_name: Optional[str] = Field(None, max_length=20)
    birth_date: date
    sex: Sex
    province_code: str = Field(..., min_length=1)
    lgu_code: str = Field(..., min_length=1)
    barangay_code: str = Field(..., min_length=1)
    osca_id: Optional[str] = None
    rrn: Optional[str] = None
    remarks: Optional[str] = None

    @field_validator('last_name', 'first_name', 'middle_name', 'extension_name', mode='before')
    @classmethod
    def strip_names(cls, v):
        if isinstance(v, str):
            v = v.strip()
        return v


class CitizenStatusUpdate(BaseModel):
    """Move a citizen to another workflow status."""
    status: CitizenStatus
    payment_date: Optional[date] = None
    validator: Optional[str] = None
    validation_date: Optional[date] = None
    remarks: Optional[str] = None


class CitizenRecord(BaseModel):
    """Single citizen record."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
    last_name: str
    first_name: str
    middle_name: Optional[str] = None
    extension_name: Optional[str] = None
    birth_date: date
    sex: str
    province_code: str
    lgu_code: str
    barangay_code: str
    status: str
    payment_date: Optional[date] = None
    osca_id: Optional[str] = None
    rrn: Optional[str] = None
    validator: Optional[str] = None
    validation_date: Optional[date] = None
    remarks: Optional[str] = None
    calendar_year: int


class EligibilityResponse(BaseModel):
    """Eligibility of a birth date across target years."""
    birth_year: int
    target_years: List[int]
    qualifying_age: int
    tier: Optional[str]
    eligible: bool
    cash_amount: int
    calendar_year: int
