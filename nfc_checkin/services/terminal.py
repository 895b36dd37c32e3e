# =======================================================================================
# nfc_checkin/services/terminal.py - Client Entry Points
# =======================================================================================
import logging
from typing import Any, Optional, Protocol, Union
from ..config import config
from ..models.schemas import AccessEvent, RegistrationResult
from ..utils.deadlines import Deadline
from ..utils.exceptions import NoTagPresentError, TagReadError
from ..utils.identifiers import normalize
from .access_ledger import AccessLedger
from .registry_store import RegistryStore

logger = logging.getLogger("nfc_checkin.terminal")


class TagReader(Protocol):
    """Raw tag supplier. Raises NoTagPresentError or TagReadError."""

    def scan_tag(self) -> Any:
        ...


class CheckinTerminal:
    """
    What a check-in client talks to. This is the only place raw identifiers
    are normalized; everything downstream receives canonical keys.
    """

    def __init__(self, registry: RegistryStore, ledger: AccessLedger, default_deadline: Optional[float] = None):
        self.registry = registry
        self.ledger = ledger
        self.default_deadline = config.OPERATION_DEADLINE if default_deadline is None else default_deadline

    def _deadline(self, deadline: Union[Deadline, float, None]) -> Optional[Deadline]:
        return Deadline.resolve(self.default_deadline if deadline is None else deadline)

    def submit_registration(
        self,
        raw: Any,
        name: str,
        role: str,
        *,
        allow_synthetic: bool = False,
        deadline: Union[Deadline, float, None] = None,
    ) -> RegistrationResult:
        identifier = normalize(raw)
        record_id = self.registry.register(
            identifier, name, role,
            allow_synthetic=allow_synthetic,
            deadline=self._deadline(deadline),
        )
        return RegistrationResult(
            record_id=record_id,
            identifier=identifier.value,
            synthetic=identifier.synthetic,
        )

    def submit_scan(self, raw: Any, *, deadline: Union[Deadline, float, None] = None) -> AccessEvent:
        identifier = normalize(raw)
        if identifier.synthetic:
            logger.warning("Scan produced no readable identifier; using synthetic key %s", identifier.value)
        return self.ledger.record_attempt(identifier, deadline=self._deadline(deadline))

    def scan_and_submit(self, reader: TagReader) -> Optional[AccessEvent]:
        """
        Read one tag and submit it. A missing or unreadable tag is a client-side
        condition: nothing is recorded and None is returned.
        """
        try:
            raw = reader.scan_tag()
        except NoTagPresentError:
            logger.debug("No tag presented")
            return None
        except TagReadError as e:
            logger.warning("Tag read failed: %s", e)
            return None
        return self.submit_scan(raw)
