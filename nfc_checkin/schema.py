# =======================================================================================
# nfc_checkin/schema.py - Table Definitions
# =======================================================================================
from sqlalchemy import MetaData, Table, Column, Integer, String, DateTime, Index, func

metadata = MetaData()

# Keyed by canonical identifier; the primary key is the uniqueness guarantee
# that makes register() a single atomic INSERT.
employees = Table(
    "employees",
    metadata,
    Column("identifier", String(64), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("role", String(255), nullable=False),
    # Assigned by the database at INSERT time
    Column("registered_at", DateTime(timezone=True), nullable=False, server_default=func.now()),
)

# Append-only. sqlite_autoincrement keeps sequence numbers from being reused.
access_events = Table(
    "access_events",
    metadata,
    Column("sequence", Integer, primary_key=True, autoincrement=True),
    Column("employee_identifier", String(64), nullable=False),
    Column("employee_name", String(255), nullable=False, default=""),
    Column("employee_role", String(255), nullable=False, default=""),
    Column("event_type", String(32), nullable=False),
    Column("direction", String(16), nullable=True),
    Column("detail", String(255), nullable=True),
    Column("occurred_at", DateTime(timezone=True), nullable=False),
    Index("ix_access_events_identifier", "employee_identifier", "sequence"),
    sqlite_autoincrement=True,
)
