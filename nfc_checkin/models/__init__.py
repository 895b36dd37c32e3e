# =======================================================================================
# nfc_checkin/models/__init__.py - Models Package
# =======================================================================================
from .schemas import *
from .enums import *

__all__ = [
    "EmployeeRecord", "AccessEvent", "RegistrationResult", "RegisterRequest",
    "ScanRequest", "SerialMessage", "AccessEventType", "Direction", "SerialStatus",
]
