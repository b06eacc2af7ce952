from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from timetrack.main import app
from timetrack.models import Employee, TimeRecord


def create(client, **overrides):
    payload = {"name": "Ada Lovelace", "email": "ada@example.com", "startDate": "2024-03-10"}
    payload.update(overrides)
    return client.post("/employees", json=payload)


def test_list_employees_empty():
    with TestClient(app) as client:
        response = client.get("/employees")

    assert response.status_code == 200
    assert response.json() == []


def test_create_employee_and_list():
    with TestClient(app) as client:
        create_response = create(client, name="  Ada Lovelace  ")
        create(client, name="Alan Turing", email="alan@example.com", endDate="2024-06-15")
        list_response = client.get("/employees")

    assert create_response.status_code == 201
    created = create_response.json()
    assert created["id"] > 0
    assert created["name"] == "Ada Lovelace"
    assert created["startDate"] == "2024-03-10"
    assert created["endDate"] is None
    assert created["createdAt"]

    assert [e["name"] for e in list_response.json()] == ["Ada Lovelace", "Alan Turing"]
    assert list_response.json()[1]["endDate"] == "2024-06-15"


def test_create_employee_duplicate_email_rejected():
    with TestClient(app) as client:
        first = create(client)
        second = create(client, name="Someone Else", email="ADA@example.com")

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["detail"] == "Employee with this email already exists"


@pytest.mark.parametrize(
    "overrides",
    [
        {"startDate": None},
        {"name": "   "},
        {"email": "not-an-email"},
        {"endDate": "2024-03-09"},
    ],
)
def test_create_employee_validation(overrides):
    with TestClient(app) as client:
        response = create(client, **overrides)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request parameters"


def test_get_employee_and_not_found():
    with TestClient(app) as client:
        employee_id = create(client).json()["id"]
        found = client.get(f"/employees/{employee_id}")
        missing = client.get("/employees/4242")

    assert found.status_code == 200
    assert found.json()["email"] == "ada@example.com"
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Employee not found"


def test_partial_update_keeps_unsent_fields():
    with TestClient(app) as client:
        employee_id = create(client, endDate="2024-12-31").json()["id"]
        response = client.put(f"/employees/{employee_id}", json={"name": "Countess Lovelace"})

    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "Countess Lovelace"
    assert body["email"] == "ada@example.com"
    assert body["startDate"] == "2024-03-10"
    assert body["endDate"] == "2024-12-31"


def test_update_can_clear_end_date():
    with TestClient(app) as client:
        employee_id = create(client, endDate="2024-12-31").json()["id"]
        response = client.put(f"/employees/{employee_id}", json={"endDate": None})

    assert response.status_code == 200
    assert response.json()["endDate"] is None


def test_update_rejects_inverted_window():
    with TestClient(app) as client:
        employee_id = create(client).json()["id"]
        response = client.put(f"/employees/{employee_id}", json={"endDate": "2024-01-01"})

    assert response.status_code == 400
    assert response.json()["detail"] == "End date cannot be before start date"


def test_update_rejects_taken_email():
    with TestClient(app) as client:
        create(client, name="Alan Turing", email="alan@example.com")
        employee_id = create(client).json()["id"]
        same = client.put(f"/employees/{employee_id}", json={"email": "ada@example.com"})
        taken = client.put(f"/employees/{employee_id}", json={"email": "alan@example.com"})
        missing = client.put("/employees/4242", json={"name": "Nobody"})

    assert same.status_code == 200
    assert taken.status_code == 400
    assert missing.status_code == 404


def test_delete_employee_removes_time_records(db):
    with TestClient(app) as client:
        employee_id = create(client).json()["id"]
        client.post(
            "/time-tracking",
            json=[{"employeeId": employee_id, "year": 2024, "month": 5, "day": 3, "hours": 8}],
        )
        response = client.delete(f"/employees/{employee_id}")
        again = client.delete(f"/employees/{employee_id}")

    assert response.status_code == 200
    assert response.json() == {"message": "Employee successfully deleted"}
    assert again.status_code == 404
    assert db.query(Employee).count() == 0
    assert db.query(TimeRecord).count() == 0


def test_active_employees_on_a_given_day(make_employee):
    make_employee("Ada", date(2020, 1, 1))
    make_employee("Bob", date(2024, 6, 10))
    make_employee("Carl", date(2020, 1, 1), date(2024, 6, 14))

    with TestClient(app) as client:
        today = client.get("/employees/active")
        earlier = client.get("/employees/active", params={"on": "2024-06-03"})

    assert [e["name"] for e in today.json()] == ["Ada", "Bob"]
    assert [e["name"] for e in earlier.json()] == ["Ada", "Carl"]


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_out_of_range_employee_id_is_a_bad_request(method):
    oversized = "/employees/100000000000000000000"

    with TestClient(app) as client:
        if method == "put":
            response = client.put(oversized, json={"name": "Nobody"})
        else:
            response = getattr(client, method)(oversized)

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid request parameters"
