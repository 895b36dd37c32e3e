# =======================================================================================
# nfc_checkin/api/dependencies.py - FastAPI Dependencies
# =======================================================================================
from fastapi import Depends, Request
from ..database import DatabaseManager
from ..services.access_ledger import AccessLedger
from ..services.registry_store import RegistryStore
from ..services.terminal import CheckinTerminal

def get_db_manager(request: Request) -> DatabaseManager:
    """Dependency to get the database manager the app was created with."""
    return request.app.state.db

def get_registry(db: DatabaseManager = Depends(get_db_manager)) -> RegistryStore:
    return RegistryStore(db)

def get_ledger(
    db: DatabaseManager = Depends(get_db_manager),
    registry: RegistryStore = Depends(get_registry),
) -> AccessLedger:
    return AccessLedger(db, registry)

def get_terminal(
    registry: RegistryStore = Depends(get_registry),
    ledger: AccessLedger = Depends(get_ledger),
) -> CheckinTerminal:
    return CheckinTerminal(registry, ledger)
