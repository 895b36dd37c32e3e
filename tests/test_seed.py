"""Tests for the sample-data loader."""

from nfc_checkin.models.enums import AccessEventType
from nfc_checkin.seed import SAMPLE_EMPLOYEES, seed


def test_seed_populates_registry_and_ledger(registry, ledger, db):
    result = seed(db)

    assert result["employees"] == ["04A23B915C6D80", "87654321"]
    assert registry.lookup("87654321").name == "María González"
    events = ledger.list_events()
    assert [e.event_type for e in events] == [AccessEventType.GRANTED] * len(SAMPLE_EMPLOYEES)
    assert [e.sequence for e in events] == result["events"]


def test_seed_can_run_twice(registry, ledger, db):
    seed(db)
    second = seed(db)

    assert second["employees"] == []
    assert registry.count() == len(SAMPLE_EMPLOYEES)
    directions = [e.direction.value for e in ledger.list_events(identifier="87654321")]
    assert directions == ["check_in", "check_out"]
