"""Tests for CheckinTerminal: the client entry points and raw tag suppliers."""

import pytest

from nfc_checkin.models.enums import AccessEventType
from nfc_checkin.services.terminal import CheckinTerminal
from nfc_checkin.utils.deadlines import Deadline
from nfc_checkin.utils.exceptions import (
    AlreadyRegisteredError,
    NoTagPresentError,
    SyntheticIdentifierError,
    TagReadError,
)


class FakeReader:
    def __init__(self, *readings):
        self.readings = list(readings)

    def scan_tag(self):
        reading = self.readings.pop(0)
        if isinstance(reading, Exception):
            raise reading
        return reading


def test_byte_and_string_readings_resolve_to_same_employee(terminal):
    result = terminal.submit_registration([0xAA, 0xBB], "Ana Ruiz", "Cashier")
    assert result.record_id == "AABB"
    assert result.synthetic is False

    event = terminal.submit_scan("aa:bb")
    assert event.event_type == AccessEventType.GRANTED
    assert event.employee_name == "Ana Ruiz"


def test_registration_with_separators_is_duplicate_of_plain_form(terminal):
    terminal.submit_registration("aa:bb:cc:dd", "Ana Ruiz", "Cashier")
    with pytest.raises(AlreadyRegisteredError):
        terminal.submit_registration(b"\xaa\xbb\xcc\xdd", "Luis Soto", "Manager")


def test_unreadable_registration_is_refused_unless_acknowledged(terminal):
    with pytest.raises(SyntheticIdentifierError):
        terminal.submit_registration("???", "Ana Ruiz", "Cashier")

    result = terminal.submit_registration("???", "Ana Ruiz", "Cashier", allow_synthetic=True)
    assert result.synthetic is True
    assert result.identifier.startswith("TEMP")


def test_scan_and_submit_records_a_reading(terminal):
    event = terminal.scan_and_submit(FakeReader(b"\xde\xad\xbe\xef"))
    assert event.event_type == AccessEventType.DENIED_UNREGISTERED
    assert event.employee_identifier == "DEADBEEF"


@pytest.mark.parametrize("failure", [NoTagPresentError("none"), TagReadError("crc")])
def test_reader_failures_never_reach_the_ledger(terminal, ledger, failure):
    assert terminal.scan_and_submit(FakeReader(failure)) is None
    assert ledger.list_events() == []


def test_explicit_deadline_overrides_default(registry, ledger):
    registry.register("AABB", "Ana Ruiz", "Cashier")
    terminal = CheckinTerminal(registry, ledger)

    assert terminal.submit_scan("AABB", deadline=Deadline(0)).event_type == AccessEventType.ERROR
    assert terminal.submit_scan("AABB").event_type == AccessEventType.GRANTED
