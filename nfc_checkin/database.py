# =======================================================================================
# nfc_checkin/database.py - Database Management
# =======================================================================================
import logging
from contextlib import contextmanager
from typing import Any, Dict, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool
from .config import config
from .schema import metadata

logger = logging.getLogger("nfc_checkin.database")


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool settings for server databases; SQLite gets a busy timeout instead of an isolation level."""
    options: Dict[str, Any] = {
        "poolclass": QueuePool,
        "pool_size": config.DB_POOL_SIZE,
        "max_overflow": config.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "future": True,
    }
    if url.startswith("sqlite"):
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": config.SQLITE_BUSY_TIMEOUT,
        }
    else:
        if url.startswith("mysql"):
            # NOW() defaults follow the session zone; keep them in UTC
            options["connect_args"] = {"init_command": "SET time_zone = '+00:00'"}
        if config.DB_ISOLATION_LEVEL:
            options["isolation_level"] = config.DB_ISOLATION_LEVEL
    return options


class DatabaseManager:
    """Manages database connections and transactions."""

    def __init__(self, url: Optional[str] = None):
        self.url = url or config.DB_URL
        self.engine: Engine = create_engine(self.url, **_engine_options(self.url))

    @contextmanager
    def get_connection(self):
        """Get a connection inside a transaction; commits on exit, rolls back on error."""
        with self.engine.begin() as conn:
            yield conn

    def init_schema(self) -> None:
        """Create the employees and access_events tables if they are missing."""
        metadata.create_all(self.engine)
        logger.debug("Schema ensured on %s", self.engine.url.render_as_string(hide_password=True))

    def ping(self) -> bool:
        with self.get_connection() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()

# Global database instance
db_manager = DatabaseManager()
