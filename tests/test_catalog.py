"""API tests for services, clients and the dashboard."""

from __future__ import annotations

DAY = "2026-06-02"


def _book(client, auth, catalog, time, service="haircut"):
    return client.post(
        "/appointment",
        json={"date": f"{DAY}T{time}:00", "client_id": catalog["client"], "service_id": catalog[service]},
        headers=auth,
    )


def test_service_crud(client, auth):
    resp = client.post("/service", json={"name": "Fade", "price": 35.0, "duration": 30}, headers=auth)
    assert resp.status_code == 201
    service_id = resp.json()["id"]

    resp = client.put(
        f"/service/{service_id}",
        json={"name": "Skin Fade", "price": 45.0, "duration": 40},
        headers=auth,
    )
    assert resp.json()["name"] == "Skin Fade"
    assert resp.json()["duration"] == 40

    assert [s["name"] for s in client.get("/service", headers=auth).json()] == ["Skin Fade"]
    assert client.delete(f"/service/{service_id}", headers=auth).status_code == 204
    resp = client.put(
        f"/service/{service_id}",
        json={"name": "Fade", "price": 35.0, "duration": 30},
        headers=auth,
    )
    assert resp.status_code == 404


def test_service_longer_than_conflict_window(client, auth):
    resp = client.post("/service", json={"name": "Full Day", "price": 500.0, "duration": 180}, headers=auth)

    assert resp.status_code == 422
    assert resp.json()["detail"] == "Service duration cannot exceed 120 minutes"


def test_service_duration_must_be_positive(client, auth):
    resp = client.post("/service", json={"name": "Nothing", "price": 0, "duration": 0}, headers=auth)

    assert resp.status_code == 422


def test_service_in_use_cannot_be_deleted(client, auth, catalog):
    _book(client, auth, catalog, "14:00")

    resp = client.delete(f"/service/{catalog['haircut']}", headers=auth)

    assert resp.status_code == 409


def test_service_duration_change_applies_to_existing_bookings(client, auth, catalog):
    _book(client, auth, catalog, "14:00")
    client.put(
        f"/service/{catalog['haircut']}",
        json={"name": "Haircut", "price": 40.0, "duration": 60},
        headers=auth,
    )

    resp = _book(client, auth, catalog, "14:45", "beard")

    assert resp.status_code == 409
    assert resp.json()["conflict"]["existing_end"] == f"{DAY}T15:00:00"


def test_client_crud(client, auth):
    resp = client.post("/clientes", json={"name": "Ana Souza", "phone": "11988887777"}, headers=auth)
    assert resp.status_code == 201
    client_id = resp.json()["id"]

    assert client.get(f"/clientes/{client_id}", headers=auth).json()["name"] == "Ana Souza"

    resp = client.put(f"/clientes/{client_id}", json={"name": "Ana S. Lima", "phone": "11988887777"}, headers=auth)
    assert resp.json()["name"] == "Ana S. Lima"
    assert resp.json()["phone"] == "11988887777"

    assert client.delete(f"/clientes/{client_id}", headers=auth).status_code == 204
    assert client.get(f"/clientes/{client_id}", headers=auth).status_code == 404


def test_client_blank_phone_is_stored_as_none(client, auth):
    resp = client.post("/clientes", json={"name": "Bruno", "phone": "  "}, headers=auth)

    assert resp.status_code == 201
    assert resp.json()["phone"] is None
    # several clients without a phone do not trip the unique constraint
    assert client.post("/clientes", json={"name": "Bia", "phone": ""}, headers=auth).status_code == 201


def test_client_phone_can_be_cleared(client, auth, catalog):
    resp = client.put(f"/clientes/{catalog['client']}", json={"name": "Carlos", "phone": ""}, headers=auth)
    assert resp.status_code == 200
    assert resp.json()["phone"] is None

    resp = client.put(f"/clientes/{catalog['client']}", json={"name": "Carlos", "phone": "11977776666"}, headers=auth)
    assert resp.json()["phone"] == "11977776666"

    resp = client.put(f"/clientes/{catalog['client']}", json={"name": "Carlos Lima"}, headers=auth)
    assert resp.json()["phone"] is None

    # the old number is free again
    resp = client.post("/clientes", json={"name": "Other", "phone": "11999990000"}, headers=auth)
    assert resp.status_code == 201


def test_client_duplicate_phone(client, auth, catalog):
    resp = client.post("/clientes", json={"name": "Other", "phone": "11999990000"}, headers=auth)

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Phone already registered"


def test_client_search_by_name(client, auth, catalog):
    client.post("/clientes", json={"name": "Carla"}, headers=auth)

    found = client.get("/clientes/nome/car", headers=auth).json()

    assert sorted(c["name"] for c in found) == ["Carla", "Carlos"]
    assert client.get("/clientes/nome/zzz", headers=auth).status_code == 404


def test_client_with_appointments_cannot_be_deleted(client, auth, catalog):
    _book(client, auth, catalog, "14:00")

    assert client.delete(f"/clientes/{catalog['client']}", headers=auth).status_code == 409


def test_dashboard(client, auth, catalog):
    ids = [
        _book(client, auth, catalog, time, service).json()["id"]
        for time, service in [("09:00", "haircut"), ("10:00", "haircut"), ("11:00", "combo")]
    ]
    client.put(f"/appointment/{ids[0]}/complete", headers=auth)
    client.put(f"/appointment/{ids[2]}/complete", headers=auth)

    overview = client.get("/dashboard/overview", headers=auth).json()
    assert overview == {
        "total_clients": 1,
        "total_services": 3,
        "total_appointments": 3,
        "completed_appointments": 2,
    }

    revenue = client.get("/dashboard/revenue", headers=auth).json()
    assert revenue == {"total_revenue": 100.0, "month_revenue": 100.0}

    upcoming = client.get("/dashboard/upcoming-appointments", headers=auth).json()
    assert [a["id"] for a in upcoming] == [ids[1]]

    popular = client.get("/dashboard/popular-services", headers=auth).json()
    assert popular[0] == {"service_id": catalog["haircut"], "service_name": "Haircut", "quantity": 2}
