"""Tests for the serial reader bridge: line parsing and request handling."""

import json
import threading
import time

import pytest

from nfc_checkin.services.serial_service import SerialService, SerialTagReader, parse_line
from nfc_checkin.utils.exceptions import NoTagPresentError, TagReadError
from nfc_checkin.workers.serial_worker import SerialWorker


class FakePort:
    def __init__(self, *lines):
        self.lines = [line.encode() for line in lines]
        self.written = []

    def readline(self):
        return self.lines.pop(0) if self.lines else b""

    def write(self, data):
        self.written.append(data)


def test_parse_json_request():
    message = parse_line('{"t": "req", "id": 7, "uid": "04:A2:3B:91"}\n')
    assert message.id == 7
    assert message.uid == "04:A2:3B:91"


def test_parse_bare_uid():
    assert parse_line("04A23B91\r\n").uid == "04A23B91"


def test_parse_empty_line_means_no_tag():
    with pytest.raises(NoTagPresentError):
        parse_line("   \n")


def test_parse_malformed_json_is_read_error():
    with pytest.raises(TagReadError):
        parse_line('{"t": "req", "id": "seven"')


def test_reader_ignores_non_request_messages():
    reader = SerialTagReader(FakePort('{"t": "hello", "id": 1}'))
    with pytest.raises(NoTagPresentError):
        reader.scan_tag()


def test_handle_once_replies_with_grant(registry, terminal):
    registry.register("04A23B91", "Ana Ruiz", "Cashier")
    port = FakePort('{"t": "req", "id": 3, "uid": "04:a2:3b:91"}')

    response = SerialService(terminal).handle_once(SerialTagReader(port))

    assert response["status"] == 1
    assert response["id"] == 3
    assert response["event"] == "granted"
    assert response["direction"] == "check_in"
    assert response["name"] == "Ana Ruiz"
    assert json.loads(port.written[0].decode()) == response


def test_handle_once_replies_with_denial(terminal):
    port = FakePort("DEADBEEF")

    response = SerialService(terminal).handle_once(SerialTagReader(port))

    assert response["status"] == 0
    assert response["event"] == "denied-unregistered"
    assert response["name"] == "Guest"


def test_handle_once_skips_idle_reads(terminal, ledger):
    port = FakePort("")
    assert SerialService(terminal).handle_once(SerialTagReader(port)) is None
    assert port.written == []
    assert ledger.list_events() == []


def test_worker_stays_off_when_disabled(terminal):
    # SERIAL_ENABLED=false in the test environment
    assert SerialWorker(terminal).start() is False


def test_stop_waits_for_the_worker_thread(terminal):
    worker = SerialWorker(terminal)

    def loop():
        while worker.running:
            time.sleep(0.01)

    worker.running = True
    worker._thread = threading.Thread(target=loop, daemon=True)
    worker._thread.start()
    thread = worker._thread

    worker.stop()

    assert not thread.is_alive()
    assert worker._thread is None


def test_stop_without_start_is_a_no_op(terminal):
    worker = SerialWorker(terminal)
    worker.stop()
    assert worker.running is False
