# =======================================================================================
# nfc_checkin/seed.py - Sample Data
# =======================================================================================
"""
Populate the registry and the access ledger with sample data.

    python -m nfc_checkin.seed

Safe to run more than once: employees that already exist are skipped, and
each run appends one more check-in per sample employee.
"""
import logging
from typing import Dict, List, Optional
from .database import DatabaseManager, db_manager
from .logging_setup import configure_logging
from .services.access_ledger import AccessLedger
from .services.registry_store import RegistryStore
from .utils.exceptions import AlreadyRegisteredError
from .utils.identifiers import normalize

logger = logging.getLogger("nfc_checkin.seed")

SAMPLE_EMPLOYEES = [
    ("04:A2:3B:91:5C:6D:80", "Juan Pérez López", "Supervisor de Ventas"),
    ("87:65:43:21", "María González", "Desarrolladora"),
]


def seed(db: DatabaseManager) -> Dict[str, List]:
    """Register the sample employees and record one scan for each."""
    registry = RegistryStore(db)
    ledger = AccessLedger(db, registry)
    registered, events = [], []

    for raw, name, role in SAMPLE_EMPLOYEES:
        key = normalize(raw)
        try:
            registered.append(registry.register(key, name, role))
        except AlreadyRegisteredError:
            logger.info("Employee %s already present; skipping", key)
        events.append(ledger.record_attempt(key).sequence)

    logger.info("Seeded %d employees and %d access events", len(registered), len(events))
    return {"employees": registered, "events": events}


def main(db: Optional[DatabaseManager] = None) -> None:
    configure_logging()
    database = db or db_manager
    database.init_schema()
    seed(database)


if __name__ == "__main__":
    main()
