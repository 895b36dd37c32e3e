# =======================================================================================
# nfc_checkin/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *
from .identifiers import Identifier, normalize, is_synthetic
from .deadlines import Deadline

__all__ = [
    "CheckinError", "InvalidInputError", "SyntheticIdentifierError",
    "AlreadyRegisteredError", "EmployeeNotFoundError", "StorageUnavailableError",
    "OperationTimeoutError", "TagReaderError", "NoTagPresentError", "TagReadError",
    "Identifier", "normalize", "is_synthetic", "Deadline",
]
