# =======================================================================================
# nfc_checkin/utils/exceptions.py - Custom Exceptions
# =======================================================================================
class CheckinError(Exception):
    """Base exception for the NFC check-in core."""
    status_code = 500
    code = "checkin_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

    def to_response(self) -> dict:
        return {"error": self.code, "message": self.message}

class InvalidInputError(CheckinError):
    """Name and role must be non-empty."""
    status_code = 422
    code = "invalid_input"

class SyntheticIdentifierError(CheckinError):
    """Identifier was synthesized from unreadable input and was not acknowledged."""
    status_code = 422
    code = "synthetic_identifier"

class AlreadyRegisteredError(CheckinError):
    """Identifier is already registered to an employee."""
    status_code = 409
    code = "already_registered"

class EmployeeNotFoundError(CheckinError):
    """No employee is registered for this identifier."""
    status_code = 404
    code = "not_found"

class StorageUnavailableError(CheckinError):
    """The registry storage could not be reached."""
    status_code = 503
    code = "storage_unavailable"

class OperationTimeoutError(StorageUnavailableError):
    """The operation exceeded its deadline."""
    status_code = 504
    code = "timeout"

# ---- client layer: raised by tag readers, never by the core ----

class TagReaderError(Exception):
    """Base exception for raw tag suppliers."""
    pass

class NoTagPresentError(TagReaderError):
    """Raised when no tag was presented to the reader."""
    pass

class TagReadError(TagReaderError):
    """Raised when a tag was presented but could not be read."""
    pass
