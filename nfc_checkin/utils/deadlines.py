# =======================================================================================
# nfc_checkin/utils/deadlines.py - Caller Deadlines
# =======================================================================================
import time
from typing import Optional, Union
from .exceptions import OperationTimeoutError


class Deadline:
    """A point in monotonic time after which an operation must be abandoned."""

    def __init__(self, seconds: float):
        self.seconds = seconds
        self.expires_at = time.monotonic() + seconds

    @classmethod
    def resolve(cls, value: Union["Deadline", float, None]) -> Optional["Deadline"]:
        """Accept a Deadline, a number of seconds (<= 0 meaning none) or None."""
        if value is None or isinstance(value, Deadline):
            return value
        if value <= 0:
            return None
        return cls(value)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, operation: str) -> None:
        if self.expired():
            raise OperationTimeoutError(f"{operation} exceeded its {self.seconds:g}s deadline")
