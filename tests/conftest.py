"""Shared fixtures: a fresh SQLite-backed registry and ledger per test."""

import os
import tempfile
from contextlib import contextmanager

# Must run before nfc_checkin.config is imported
_TMP_DIR = tempfile.mkdtemp(prefix="nfc_checkin_tests_")
os.environ.setdefault("DB_URL", f"sqlite:///{os.path.join(_TMP_DIR, 'default.db')}")
os.environ.setdefault("SERIAL_ENABLED", "false")
os.environ.setdefault("OPERATION_DEADLINE", "0")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from nfc_checkin.database import DatabaseManager
from nfc_checkin.main import create_app
from nfc_checkin.services.access_ledger import AccessLedger
from nfc_checkin.services.registry_store import RegistryStore
from nfc_checkin.services.terminal import CheckinTerminal


class UnavailableDatabase(DatabaseManager):
    """A database whose every connection attempt fails."""

    @contextmanager
    def get_connection(self):
        raise OperationalError("SELECT 1", {}, Exception("database is down"))
        yield  # pragma: no cover


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(f"sqlite:///{tmp_path / 'checkin.db'}")
    manager.init_schema()
    yield manager
    manager.dispose()


@pytest.fixture
def broken_db(tmp_path):
    manager = UnavailableDatabase(f"sqlite:///{tmp_path / 'broken.db'}")
    yield manager
    manager.dispose()


@pytest.fixture
def registry(db):
    return RegistryStore(db)


@pytest.fixture
def ledger(db, registry):
    return AccessLedger(db, registry)


@pytest.fixture
def terminal(registry, ledger):
    return CheckinTerminal(registry, ledger, default_deadline=0)


@pytest.fixture
def client(db):
    app = create_app(db=db, start_worker=False)
    with TestClient(app) as c:
        yield c
