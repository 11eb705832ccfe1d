"""
Schemas package initialization.
"""
from app.schemas.common import (
    PaginatedResponse,
    HealthResponse,
)
from app.schemas.citizen import (
    Sex,
    CitizenStatus,
    CitizenCreate,
    CitizenStatusUpdate,
    CitizenRecord,
    EligibilityResponse,
)
from app.schemas.dashboard import (
    FilterCriteria,
    AggregateReport,
    GeographyStatusRow,
    PaidByAgeRow,
)
from app.schemas.eca import (
    EcaType,
    EcaStatus,
    EcaStatusUpdate,
    EcaApplicationRecord,
)

__all__ = [
    # Common
    "PaginatedResponse",
    "HealthResponse",
    # Citizen
    "Sex",
    "CitizenStatus",
    "CitizenCreate",
    "CitizenStatusUpdate",
    "CitizenRecord",
    "EligibilityResponse",
    # Dashboard
    "FilterCriteria",
    "AggregateReport",
    "GeographyStatusRow",
    "PaidByAgeRow",
    # ECA
    "EcaType",
    "EcaStatus",
    "EcaStatusUpdate",
    "EcaApplicationRecord",
]
