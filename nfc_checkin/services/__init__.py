# =======================================================================================
# nfc_checkin/services/__init__.py - Services Package
# =======================================================================================
from .registry_store import RegistryStore
from .access_ledger import AccessLedger
from .terminal import CheckinTerminal, TagReader
from .serial_service import SerialService, SerialTagReader

__all__ = [
    "RegistryStore", "AccessLedger", "CheckinTerminal", "TagReader",
    "SerialService", "SerialTagReader",
]
