"""Route tests for the HTTP API: registration, lookup, scans, audit trail."""


def _register(client, identifier="AABBCCDD", name="Ana Ruiz", role="Cashier", **extra):
    return client.post("/api/employees", json={"identifier": identifier, "name": name, "role": role, **extra})


def test_register_then_lookup(client):
    response = _register(client)
    assert response.status_code == 201
    assert response.json() == {"record_id": "AABBCCDD", "identifier": "AABBCCDD", "synthetic": False}

    record = client.get("/api/employees/AABBCCDD").json()
    assert record["name"] == "Ana Ruiz"
    assert record["role"] == "Cashier"


def test_duplicate_registration_is_conflict(client):
    assert _register(client).status_code == 201

    response = _register(client, name="Luis Soto")
    assert response.status_code == 409
    assert response.json()["error"] == "already_registered"
    assert client.get("/api/employees/AABBCCDD").json()["name"] == "Ana Ruiz"


def test_blank_name_is_rejected(client):
    response = _register(client, name="   ")
    assert response.status_code == 422
    assert response.json()["error"] == "invalid_input"


def test_unreadable_identifier_needs_acknowledgment(client):
    response = _register(client, identifier="???")
    assert response.status_code == 422
    assert response.json()["error"] == "synthetic_identifier"

    response = _register(client, identifier="???", allow_synthetic=True)
    assert response.status_code == 201
    assert response.json()["synthetic"] is True


def test_lookup_unknown_is_not_found(client):
    response = client.get("/api/employees/DEADBEEF")
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


def test_lookup_normalizes_path_identifier(client):
    _register(client, identifier=[0xAA, 0xBB])
    assert client.get("/api/employees/aa:bb").status_code == 200


def test_scan_unregistered_is_denied(client):
    response = client.post("/api/scan", json={"identifier": "DEADBEEF"})
    assert response.status_code == 200
    body = response.json()
    assert body["event_type"] == "denied-unregistered"
    assert body["employee_name"] == ""


def test_scan_registered_is_granted(client):
    _register(client, identifier="aa:bb")
    body = client.post("/api/scan", json={"identifier": [0xAA, 0xBB]}).json()
    assert body["event_type"] == "granted"
    assert body["employee_name"] == "Ana Ruiz"
    assert body["direction"] == "check_in"


def test_events_and_analytics(client):
    _register(client)
    client.post("/api/scan", json={"identifier": "AABBCCDD"})
    client.post("/api/scan", json={"identifier": "DEADBEEF"})

    events = client.get("/api/events").json()["events"]
    assert [e["event_type"] for e in events] == ["granted", "denied-unregistered"]
    assert events[0]["sequence"] < events[1]["sequence"]

    filtered = client.get("/api/events", params={"identifier": "aa:bb:cc:dd"}).json()["events"]
    assert len(filtered) == 1

    summary = client.get("/api/analytics").json()["summary"]
    assert summary["total_employees"] == 1
    assert summary["granted"] == 1
    assert summary["denied_unregistered"] == 1
    assert summary["errors"] == 0


def test_csv_import(client):
    csv_body = "identifier,name,role\n04:a2:3b:91,Ana Ruiz,Cashier\n04A23B91,Dup,Cashier\n"
    response = client.post(
        "/api/employees/import",
        files={"file": ("employees.csv", csv_body, "text/csv")},
    )
    assert response.json() == {"inserted": 1, "duplicates": 1, "invalid": 0}
    assert len(client.get("/api/employees").json()["employees"]) == 1


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok", "dataAvailable": True, "message": None}


def test_storage_outage_keeps_scans_answerable(broken_db):
    from fastapi.testclient import TestClient
    from nfc_checkin.main import create_app

    with TestClient(create_app(db=broken_db, start_worker=False)) as client:
        health = client.get("/api/health").json()
        assert health["status"] == "error"
        assert health["dataAvailable"] is False

        response = client.post("/api/scan", json={"identifier": "AABBCCDD"})
        assert response.status_code == 200
        assert response.json()["event_type"] == "error"
        assert response.json()["persisted"] is False

        assert client.get("/api/employees/AABBCCDD").status_code == 503
