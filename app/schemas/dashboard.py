"""
Dashboard Pydantic schemas: filter criteria and report shapes.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional, Dict, Any
from datetime import date

from app.config import settings
from app.utils.constants import CITIZEN_STATUSES


class FilterCriteria(BaseModel):
    """Filters applied before any dashboard grouping."""
    start_date: Optional[date] = Field(None, description="Registration date from")
    end_date: Optional[date] = Field(None, description="Registration date to")
    payment_date_start: Optional[date] = Field(None, description="Payment date from")
    payment_date_end: Optional[date] = Field(None, description="Payment date to")
    province_code: Optional[str] = Field(None, description="Filter by province code")
    lgu_code: Optional[str] = Field(None, description="Filter by LGU code")
    barangay_code: Optional[str] = Field(None, description="Filter by barangay code")
    statuses: List[str] = Field(default_factory=list, description="Statuses to include (empty = all)")
    age_start: Optional[int] = Field(None, ge=0, description="Minimum age in any target year")
    age_end: Optional[int] = Field(None, ge=0, description="Maximum age in any target year")
    calendar_years: List[int] = Field(
        default_factory=lambda: list(settings.DEFAULT_CALENDAR_YEARS),
        description="Target calendar years; the first one is the age-tier reference year",
    )

    @field_validator('statuses')
    @classmethod
    def check_statuses(cls, v):
        unknown = [s for s in v if s not in CITIZEN_STATUSES]
        if unknown:
            raise ValueError(f"Unknown status: {', '.join(unknown)}")
        return v

    @field_validator('calendar_years')
    @classmethod
    def check_calendar_years(cls, v):
        if not v:
            raise ValueError("calendar_years must not be empty")
        return v

    @model_validator(mode='after')
    def check_age_range(self):
        if self.age_start is not None and self.age_end is not None and self.age_start > self.age_end:
            raise ValueError("age_start cannot be greater than age_end")
        return self


class StatusCount(BaseModel):
    status: str
    count: int


class SexCount(BaseModel):
    sex: str
    count: int


class AgeTierCount(BaseModel):
    range: str
    count: int


class MonthCount(BaseModel):
    month: str
    count: int


class QuarterCount(BaseModel):
    quarter: str
    count: int


class GeographyStatusRow(BaseModel):
    """Per-status counts for one province or LGU."""
    code: str
    name: str
    encoded: int = 0
    validated: int = 0
    cleanlisted: int = 0
    waitlisted: int = 0
    paid: int = 0
    unpaid: int = 0
    compliance: int = 0
    disqualified: int = 0
    total: int = 0
    paidPercentage: float = 0


class PaidByAgeRow(BaseModel):
    age: int
    count: int
    maleCount: int
    femaleCount: int
    malePercentage: float
    femalePercentage: float
    percentage: float
    cashGift: int
    totalAmount: int


class AggregateReport(BaseModel):
    """Full dashboard payload."""
    totalCitizens: int
    byStatus: List[StatusCount]
    bySex: List[SexCount]
    byAge: List[AgeTierCount]
    byMonth: List[MonthCount]
    byQuarter: List[QuarterCount]
    paymentStats: Dict[str, int]
    provinceStats: List[GeographyStatusRow]
    lguStats: List[GeographyStatusRow]
    paidByAge: List[PaidByAgeRow]
    filters: Dict[str, Any]
