# =======================================================================================
# nfc_checkin/services/registry_store.py - Employee Registry
# =======================================================================================
import csv
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, TextIO, Union
from sqlalchemy import func, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from ..database import DatabaseManager
from ..models.schemas import EmployeeRecord
from ..schema import employees
from ..utils.deadlines import Deadline
from ..utils.exceptions import (
    AlreadyRegisteredError,
    EmployeeNotFoundError,
    InvalidInputError,
    StorageUnavailableError,
    SyntheticIdentifierError,
)
from ..utils.identifiers import Identifier, is_synthetic, normalize

logger = logging.getLogger("nfc_checkin.registry")

IdentifierLike = Union[Identifier, str]
DeadlineLike = Union[Deadline, float, None]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # SQLite and MySQL DATETIME columns read back naive; they hold UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RegistryStore:
    """Durable mapping from canonical identifier to employee record."""

    def __init__(self, db: DatabaseManager):
        self.db = db

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _key(identifier: IdentifierLike) -> str:
        key = str(identifier)
        if not key.strip():
            raise InvalidInputError("Identifier must be non-empty")
        return key

    @staticmethod
    def _clean(field: str, value: Optional[str]) -> str:
        cleaned = (value or "").strip()
        if not cleaned:
            raise InvalidInputError(f"{field} must be non-empty")
        return cleaned

    @staticmethod
    def _to_record(row) -> EmployeeRecord:
        return EmployeeRecord(
            identifier=row["identifier"],
            name=row["name"],
            role=row["role"],
            registered_at=as_utc(row["registered_at"]),
        )

    # ------------------------------------------------------------------
    # Register
    # ------------------------------------------------------------------
    def register(
        self,
        identifier: IdentifierLike,
        name: str,
        role: str,
        *,
        allow_synthetic: bool = False,
        deadline: DeadlineLike = None,
    ) -> str:
        """
        Register an identifier. Returns the record id (the canonical identifier).

        Validation happens before any storage call. Uniqueness is enforced by the
        primary key inside a single INSERT, so concurrent registrations of the
        same identifier resolve to exactly one success.
        """
        key = self._key(identifier)
        if key != key.strip():
            raise InvalidInputError("Identifier must be canonical; normalize it before registering")
        name = self._clean("Name", name)
        role = self._clean("Role", role)

        synthetic = identifier.synthetic if isinstance(identifier, Identifier) else is_synthetic(key)
        if synthetic:
            if not allow_synthetic:
                raise SyntheticIdentifierError(
                    f"Identifier {key} was synthesized from an unreadable tag"
                )
            logger.warning("Registering synthetic identifier %s for %s", key, name)

        deadline = Deadline.resolve(deadline)
        try:
            with self.db.get_connection() as conn:
                conn.execute(
                    insert(employees).values(identifier=key, name=name, role=role)
                )
                if deadline is not None:
                    # raising here rolls the INSERT back
                    deadline.check("register")
        except IntegrityError as e:
            raise AlreadyRegisteredError(f"Identifier {key} is already registered") from e
        except SQLAlchemyError as e:
            logger.error("Registry write failed for %s: %s", key, e)
            raise StorageUnavailableError("Registry storage unavailable") from e

        logger.info("Registered %s -> %s (%s)", key, name, role)
        return key

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def lookup(self, identifier: IdentifierLike, *, deadline: DeadlineLike = None) -> Optional[EmployeeRecord]:
        """Exact-match lookup. None means the identifier is not registered."""
        key = self._key(identifier)
        deadline = Deadline.resolve(deadline)
        try:
            with self.db.get_connection() as conn:
                row = conn.execute(
                    select(employees).where(employees.c.identifier == key)
                ).mappings().first()
        except SQLAlchemyError as e:
            logger.error("Registry lookup failed for %s: %s", key, e)
            raise StorageUnavailableError("Registry storage unavailable") from e

        if deadline is not None:
            deadline.check("lookup")
        return self._to_record(row) if row else None

    def get(self, identifier: IdentifierLike, *, deadline: DeadlineLike = None) -> EmployeeRecord:
        record = self.lookup(identifier, deadline=deadline)
        if record is None:
            raise EmployeeNotFoundError(f"No employee registered for {identifier}")
        return record

    def exists(self, identifier: IdentifierLike) -> bool:
        return self.lookup(identifier) is not None

    # ------------------------------------------------------------------
    # Listing
    # ------------------------------------------------------------------
    def list_employees(self, skip: int = 0, limit: int = 100) -> List[EmployeeRecord]:
        """List employees, newest registrations first."""
        try:
            with self.db.get_connection() as conn:
                rows = conn.execute(
                    select(employees)
                    .order_by(employees.c.registered_at.desc(), employees.c.identifier)
                    .offset(skip)
                    .limit(limit)
                ).mappings().all()
        except SQLAlchemyError as e:
            raise StorageUnavailableError("Registry storage unavailable") from e
        return [self._to_record(row) for row in rows]

    def count(self) -> int:
        try:
            with self.db.get_connection() as conn:
                return conn.execute(select(func.count()).select_from(employees)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageUnavailableError("Registry storage unavailable") from e

    # ------------------------------------------------------------------
    # Bulk import
    # ------------------------------------------------------------------
    def import_from_csv(self, stream: TextIO) -> Dict[str, int]:
        """
        Import employees from CSV: headers = identifier,name,role
        Example line: 04:A2:3B:91,Ana Ruiz,Cashier

        Each row is its own registration; a failing row does not undo the others.
        Synthetic identifiers are never imported.
        """
        inserted = 0
        duplicates = 0
        invalid = 0

        for row in csv.DictReader(stream):
            identifier = normalize((row.get("identifier") or "").strip())
            try:
                self.register(identifier, row.get("name"), row.get("role"))
                inserted += 1
            except AlreadyRegisteredError:
                duplicates += 1
            except (InvalidInputError, SyntheticIdentifierError) as e:
                logger.debug("Skipping CSV row %s: %s", row, e)
                invalid += 1

        logger.info("CSV import: %d inserted, %d duplicates, %d invalid", inserted, duplicates, invalid)
        return {"inserted": inserted, "duplicates": duplicates, "invalid": invalid}
