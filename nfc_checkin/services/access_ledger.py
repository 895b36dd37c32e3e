# =======================================================================================
# nfc_checkin/services/access_ledger.py - Access Decisions and Audit Trail
# =======================================================================================
import logging
from typing import Dict, List, Optional, Union
from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from ..database import DatabaseManager
from ..models.enums import AccessEventType, Direction
from ..models.schemas import AccessEvent, EmployeeRecord
from ..schema import access_events
from ..utils.deadlines import Deadline
from ..utils.exceptions import OperationTimeoutError, StorageUnavailableError
from ..utils.identifiers import Identifier
from .registry_store import RegistryStore, as_utc, utcnow

logger = logging.getLogger("nfc_checkin.ledger")


class AccessLedger:
    """
    The access-control point: every scan is decided here and appended to the
    audit trail. Storage faults become error events, never exceptions, so a
    caller that only checks for the absence of an error can never read a
    broken lookup as a grant.
    """

    def __init__(self, db: DatabaseManager, registry: RegistryStore):
        self.db = db
        self.registry = registry

    # ------------------------------------------------------------------
    # Decision
    # ------------------------------------------------------------------
    def record_attempt(
        self,
        identifier: Union[Identifier, str],
        *,
        deadline: Union[Deadline, float, None] = None,
    ) -> AccessEvent:
        """Decide and record one scan. The identifier must already be canonical."""
        key = str(identifier)
        if not key.strip():
            return self._append_error(key, "Empty identifier")

        try:
            record = self.registry.lookup(key, deadline=deadline)
        except OperationTimeoutError as e:
            return self._append_error(key, f"Registry lookup timed out: {e.message}")
        except StorageUnavailableError as e:
            return self._append_error(key, f"Registry lookup failed: {e.message}")

        try:
            if record is None:
                event = self._append(key, AccessEventType.DENIED_UNREGISTERED)
            else:
                event = self._append(key, AccessEventType.GRANTED, record=record)
        except SQLAlchemyError as e:
            # a grant that cannot be audited is not a grant
            return self._append_error(key, f"Ledger append failed: {e.__class__.__name__}")

        if event.granted:
            logger.info(
                "Granted %s to %s [%s] (seq=%s)",
                event.direction.value, record.name, key, event.sequence,
            )
        else:
            logger.info("Denied unregistered identifier %s (seq=%s)", key, event.sequence)
        return event

    # ------------------------------------------------------------------
    # Append
    # ------------------------------------------------------------------
    @staticmethod
    def _next_direction(conn: Connection, key: str) -> Direction:
        """Alternate check_in/check_out against the identifier's last grant."""
        last = conn.execute(
            select(access_events.c.direction)
            .where(
                access_events.c.employee_identifier == key,
                access_events.c.event_type == AccessEventType.GRANTED.value,
            )
            .order_by(access_events.c.sequence.desc())
            .limit(1)
        ).scalar()
        if last == Direction.CHECK_IN.value:
            return Direction.CHECK_OUT
        return Direction.CHECK_IN

    def _append(
        self,
        key: str,
        event_type: AccessEventType,
        record: Optional[EmployeeRecord] = None,
        detail: Optional[str] = None,
    ) -> AccessEvent:
        with self.db.get_connection() as conn:
            occurred_at = utcnow()
            direction = self._next_direction(conn, key) if record is not None else None
            values = {
                "employee_identifier": key,
                "employee_name": record.name if record else "",
                "employee_role": record.role if record else "",
                "event_type": event_type.value,
                "direction": direction.value if direction else None,
                "detail": detail,
                "occurred_at": occurred_at,
            }
            result = conn.execute(insert(access_events).values(**values))
            sequence = result.inserted_primary_key[0]

        return AccessEvent(sequence=sequence, **values)

    def _append_error(self, key: str, detail: str) -> AccessEvent:
        logger.error("Access error for %s: %s", key, detail)
        try:
            return self._append(key, AccessEventType.ERROR, detail=detail)
        except SQLAlchemyError as e:
            logger.critical("Could not append error event for %s: %s", key, e)
            return AccessEvent(
                employee_identifier=key,
                event_type=AccessEventType.ERROR,
                detail=detail,
                occurred_at=utcnow(),
                persisted=False,
            )

    # ------------------------------------------------------------------
    # Audit trail
    # ------------------------------------------------------------------
    def list_events(
        self,
        limit: int = 100,
        after_sequence: Optional[int] = None,
        identifier: Optional[str] = None,
    ) -> List[AccessEvent]:
        """
        Events in sequence order, optionally after a sequence number or for one identifier.

        Sequence numbers are allocated at INSERT but become visible at COMMIT. On
        databases that allocate them outside the table lock (InnoDB), a concurrent
        append can commit after a higher sequence, so polling with
        after_sequence=<last seen> may step past it. Re-read with a lower
        after_sequence, or wait for writers to quiesce, when completeness matters.
        SQLite serializes writers and is not affected.
        """
        query = select(access_events).order_by(access_events.c.sequence).limit(limit)
        if after_sequence is not None:
            query = query.where(access_events.c.sequence > after_sequence)
        if identifier is not None:
            query = query.where(access_events.c.employee_identifier == identifier)

        try:
            with self.db.get_connection() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as e:
            raise StorageUnavailableError("Ledger storage unavailable") from e

        return [AccessEvent(**{**row, "occurred_at": as_utc(row["occurred_at"])}) for row in rows]

    def summary(self) -> Dict[str, int]:
        try:
            with self.db.get_connection() as conn:
                rows = conn.execute(
                    select(access_events.c.event_type, func.count())
                    .group_by(access_events.c.event_type)
                ).all()
        except SQLAlchemyError as e:
            raise StorageUnavailableError("Ledger storage unavailable") from e

        counts = {event_type: count for event_type, count in rows}
        return {
            "total_employees": self.registry.count(),
            "total_events": sum(counts.values()),
            "granted": counts.get(AccessEventType.GRANTED.value, 0),
            "denied_unregistered": counts.get(AccessEventType.DENIED_UNREGISTERED.value, 0),
            "errors": counts.get(AccessEventType.ERROR.value, 0),
        }
