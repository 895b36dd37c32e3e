# nfc_checkin/services/serial_service.py
import json
import time
import logging
from typing import Any, Dict, Optional
from pydantic import ValidationError
from ..models.enums import SerialStatus
from ..models.schemas import AccessEvent, SerialMessage
from ..utils.exceptions import NoTagPresentError, TagReadError
from .terminal import CheckinTerminal

logger = logging.getLogger("nfc_checkin.serial")


def parse_line(line: str) -> SerialMessage:
    """
    Parse one line from the reader bridge.
    Accepts JSON ({"t": "req", "id": 7, "uid": "04:A2:3B:91"}) or a bare UID.
    """
    line = line.strip()
    if not line:
        raise NoTagPresentError("Empty line")

    if line.startswith("{"):
        try:
            return SerialMessage.model_validate_json(line)
        except ValidationError as e:
            raise TagReadError(f"Malformed reader message: {line}") from e

    return SerialMessage(uid=line)


class SerialTagReader:
    """Raw tag supplier over a line-oriented serial port (pyserial.Serial or compatible)."""

    def __init__(self, port):
        self.port = port
        self.last_message: Optional[SerialMessage] = None

    def read_message(self) -> SerialMessage:
        line = self.port.readline().decode(errors="ignore")
        message = parse_line(line)
        if message.t != "req" or not message.uid:
            raise NoTagPresentError(f"Ignoring non-request message type={message.t}")
        self.last_message = message
        return message

    def scan_tag(self) -> str:
        return self.read_message().uid

    def reply(self, response: Dict[str, Any]) -> None:
        self.port.write((json.dumps(response) + "\n").encode())


class SerialService:
    """Bridges serial tag requests to the check-in terminal."""

    def __init__(self, terminal: CheckinTerminal):
        self.terminal = terminal

    def process_message(self, message: SerialMessage) -> Dict[str, Any]:
        """Process a single scan request from the reader bridge."""
        event = self.terminal.submit_scan(message.uid)
        return self.create_response_message(message, event)

    def create_response_message(self, message: SerialMessage, event: AccessEvent) -> Dict[str, Any]:
        """Generate JSON-serializable dict to send back to the reader."""
        status = SerialStatus.GRANTED if event.granted else SerialStatus.DENIED
        return {
            "t": "resp",
            "id": message.id,
            "status": status.value,
            "ts": int(time.time()),
            "event": event.event_type.value,
            "direction": event.direction.value if event.direction else None,
            "name": event.employee_name or "Guest",
            "seq": event.sequence,
        }

    def handle_once(self, reader: SerialTagReader) -> Optional[Dict[str, Any]]:
        """Read, decide and reply for one line. Returns the response sent, if any."""
        try:
            message = reader.read_message()
        except NoTagPresentError:
            return None
        except TagReadError as e:
            logger.warning("Serial read failed: %s", e)
            return None

        logger.debug("Received: %s", message)
        response = self.process_message(message)
        reader.reply(response)
        logger.debug("Sent: %s", response)
        return response
