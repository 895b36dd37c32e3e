# =======================================================================================
# nfc_checkin/models/enums.py - Enums and Constants
# =======================================================================================
from enum import Enum
from typing import Literal

# Type aliases for better type hints
HealthStatus = Literal["ok", "error"]

class AccessEventType(str, Enum):
    """Outcome of one scan attempt."""
    GRANTED = "granted"
    DENIED_UNREGISTERED = "denied-unregistered"
    ERROR = "error"

class Direction(str, Enum):
    """Alternating kind of a granted event."""
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"

class SerialStatus(Enum):
    """Status codes for serial responses."""
    DENIED = 0
    GRANTED = 1
