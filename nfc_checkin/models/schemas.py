# =======================================================================================
# nfc_checkin/models/schemas.py - Pydantic Models
# =======================================================================================
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field
from .enums import AccessEventType, Direction, HealthStatus

# ========== Core records ==========
class EmployeeRecord(BaseModel):
    """An employee registered against one canonical identifier."""
    model_config = ConfigDict(frozen=True)

    identifier: str
    name: str
    role: str
    registered_at: datetime

class AccessEvent(BaseModel):
    """One recorded scan attempt. Name/role are snapshots taken at write time."""
    model_config = ConfigDict(frozen=True)

    sequence: Optional[int] = None
    employee_identifier: str
    employee_name: str = ""
    employee_role: str = ""
    event_type: AccessEventType
    direction: Optional[Direction] = None
    detail: Optional[str] = None
    occurred_at: datetime
    persisted: bool = True

    @property
    def granted(self) -> bool:
        return self.event_type == AccessEventType.GRANTED

class RegistrationResult(BaseModel):
    record_id: str
    identifier: str
    synthetic: bool = False

# ========== API requests ==========
class RegisterRequest(BaseModel):
    """Register a card. identifier is the raw reading (hex string or byte list)."""
    identifier: str | List[int] = Field(..., description="Raw tag identifier")
    name: str = Field(..., max_length=255, description="Employee's full name")
    role: str = Field(..., max_length=255, description="Employee's role or title")
    allow_synthetic: bool = Field(False, description="Accept a synthesized fallback identifier")

class ScanRequest(BaseModel):
    """NFC scan request model."""
    identifier: str | List[int] = Field(..., description="Raw tag identifier")

# ========== API responses ==========
class EmployeeListResponse(BaseModel):
    employees: List[EmployeeRecord]

class ImportResponse(BaseModel):
    inserted: int
    duplicates: int
    invalid: int

class EventsResponse(BaseModel):
    events: List[AccessEvent]

class Summary(BaseModel):
    total_employees: int
    total_events: int
    granted: int
    denied_unregistered: int
    errors: int

class AnalyticsResponse(BaseModel):
    summary: Summary

class HealthResponse(BaseModel):
    status: HealthStatus
    dataAvailable: bool
    message: Optional[str] = None

# ========== Serial ==========
class SerialMessage(BaseModel):
    t: str = "req"
    id: Optional[int] = None
    uid: Optional[str] = None
