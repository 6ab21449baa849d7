"""End-to-end tests through the HTTP surface."""

from datetime import datetime, timezone

import pytest

from queuedesk.services.appointment_service import CONFLICT_MESSAGE

DAY = "2030-01-15"


async def _create_staff(client, headers, **overrides):
    payload = {"name": "Dr. Sharma", "service_type": "Doctor", "daily_capacity": 5}
    payload.update(overrides)
    response = await client.post("/staff/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _create_service(client, headers, **overrides):
    payload = {
        "name": "General Checkup",
        "duration_minutes": 30,
        "required_staff_type": "Doctor",
    }
    payload.update(overrides)
    response = await client.post("/services/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def _book(client, headers, service_id, time, staff_id=None, name="Asha"):
    payload = {
        "customer_name": name,
        "service_id": service_id,
        "appointment_date": f"{DAY}T{time}:00Z",
    }
    if staff_id is not None:
        payload["staff_id"] = staff_id
    return await client.post("/appointments/", json=payload, headers=headers)


@pytest.mark.asyncio
async def test_register_login_and_me(client):
    response = await client.post(
        "/auth/register",
        json={"email": "new@example.com", "password": "secret-pass", "full_name": "New Manager"},
    )
    assert response.status_code == 201
    assert response.json()["email"] == "new@example.com"

    duplicate = await client.post(
        "/auth/register",
        json={"email": "new@example.com", "password": "secret-pass", "full_name": "New Manager"},
    )
    assert duplicate.status_code == 400

    bad_login = await client.post(
        "/auth/login", json={"email": "new@example.com", "password": "wrong-pass"}
    )
    assert bad_login.status_code == 401

    login = await client.post(
        "/auth/login", json={"email": "new@example.com", "password": "secret-pass"}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["full_name"] == "New Manager"


@pytest.mark.asyncio
async def test_requests_without_token_are_unauthorized(client):
    for method, path in [
        ("get", "/appointments/"),
        ("post", "/queue/assign"),
        ("get", "/activity-logs/"),
        ("get", "/staff/"),
    ]:
        response = await getattr(client, method)(path)
        assert response.status_code == 401
        assert response.json()["error"] == "unauthorized"

    garbage = await client.get("/appointments/", headers={"Authorization": "Bearer nope"})
    assert garbage.status_code == 401


@pytest.mark.asyncio
async def test_staff_and_service_catalogue(client, auth_headers):
    staff = await _create_staff(client, auth_headers, daily_capacity=None)
    assert staff["daily_capacity"] == 5
    assert staff["availability"] == "available"

    patched = await client.patch(
        f"/staff/{staff['id']}", json={"availability": "on_leave"}, headers=auth_headers
    )
    assert patched.status_code == 200
    assert patched.json()["availability"] == "on_leave"

    rejected = await client.post(
        "/services/",
        json={"name": "Odd", "duration_minutes": 45, "required_staff_type": "Doctor"},
        headers=auth_headers,
    )
    assert rejected.status_code == 422

    service = await _create_service(client, auth_headers)
    listed = await client.get("/services/", headers=auth_headers)
    assert [s["id"] for s in listed.json()] == [service["id"]]

    missing = await client.get("/staff/9999", headers=auth_headers)
    assert missing.status_code == 404
    assert missing.json() == {"detail": "Staff not found", "error": "not_found"}

    missing_patch = await client.patch("/staff/9999", json={"name": "X"}, headers=auth_headers)
    assert missing_patch.json() == {"detail": "Staff not found", "error": "not_found"}

    missing_service = await client.get("/services/9999", headers=auth_headers)
    assert missing_service.status_code == 404
    assert missing_service.json() == {"detail": "Service not found", "error": "not_found"}


@pytest.mark.asyncio
async def test_create_appointment_outcomes(client, auth_headers):
    staff = await _create_staff(client, auth_headers)
    service = await _create_service(client, auth_headers)

    scheduled = await _book(client, auth_headers, service["id"], "10:00", staff_id=staff["id"])
    assert scheduled.status_code == 201
    body = scheduled.json()
    assert body["status"] == "scheduled"
    assert body["staff"]["name"] == "Dr. Sharma"
    assert body["service"]["name"] == "General Checkup"
    assert body["appointment_date"].startswith(f"{DAY}T10:00:00")

    queued = await _book(client, auth_headers, service["id"], "12:00", name="Bo")
    assert queued.status_code == 201
    assert queued.json()["status"] == "waiting"
    assert queued.json()["staff_id"] is None
    assert queued.json()["queue_position"] == 1

    conflict = await _book(client, auth_headers, service["id"], "10:30", staff_id=staff["id"])
    assert conflict.status_code == 409
    assert conflict.json() == {"detail": CONFLICT_MESSAGE, "error": "conflict"}

    missing_fields = await client.post(
        "/appointments/", json={"service_id": service["id"]}, headers=auth_headers
    )
    assert missing_fields.status_code == 400
    assert missing_fields.json()["error"] == "validation"

    unknown_service = await _book(client, auth_headers, 9999, "15:00")
    assert unknown_service.status_code == 404

    unknown_staff = await _book(client, auth_headers, service["id"], "15:00", staff_id=9999)
    assert unknown_staff.status_code == 404


@pytest.mark.asyncio
async def test_list_and_filter_appointments(client, auth_headers):
    staff = await _create_staff(client, auth_headers)
    service = await _create_service(client, auth_headers)
    await _book(client, auth_headers, service["id"], "14:00", staff_id=staff["id"], name="Late")
    await _book(client, auth_headers, service["id"], "09:00", name="Early")
    other_day = {
        "customer_name": "Tomorrow",
        "service_id": service["id"],
        "appointment_date": "2030-01-16T09:00:00Z",
    }
    await client.post("/appointments/", json=other_day, headers=auth_headers)

    response = await client.get("/appointments/", params={"date": DAY}, headers=auth_headers)
    assert response.status_code == 200
    names = [a["customer_name"] for a in response.json()["appointments"]]
    assert names == ["Early", "Late"]

    by_staff = await client.get(
        "/appointments/", params={"staff_id": staff["id"]}, headers=auth_headers
    )
    assert by_staff.json()["total"] == 1

    waiting = await client.get(
        "/appointments/", params={"status": "waiting"}, headers=auth_headers
    )
    assert {a["customer_name"] for a in waiting.json()["appointments"]} == {"Early", "Tomorrow"}


@pytest.mark.asyncio
async def test_full_staff_downgrades_then_queue_promotes(client, auth_headers):
    staff = await _create_staff(client, auth_headers, daily_capacity=1)
    service = await _create_service(client, auth_headers)

    first = await _book(client, auth_headers, service["id"], "09:00", staff_id=staff["id"], name="First")
    assert first.json()["status"] == "scheduled"

    second = await _book(client, auth_headers, service["id"], "13:00", staff_id=staff["id"], name="Second")
    assert second.status_code == 201
    assert second.json()["status"] == "waiting"
    assert second.json()["staff_id"] is None

    blocked = await client.post("/queue/assign", headers=auth_headers)
    assert blocked.status_code == 200
    assert blocked.json()["assigned"] is False
    assert blocked.json()["message"] == "No available staff for this service"

    completed = await client.post(
        f"/appointments/{first.json()['id']}/complete", headers=auth_headers
    )
    assert completed.json()["status"] == "completed"

    promoted = await client.post("/queue/assign", headers=auth_headers)
    body = promoted.json()
    assert body["assigned"] is True
    assert body["message"] == "Assigned Second to Dr. Sharma"
    assert body["appointment"]["status"] == "scheduled"
    assert body["appointment"]["staff_id"] == staff["id"]

    empty = await client.post("/queue/assign", json={}, headers=auth_headers)
    assert empty.json() == {"assigned": False, "message": "No appointments in queue", "appointment": None}


@pytest.mark.asyncio
async def test_queue_listing_and_explicit_staff(client, auth_headers):
    nurse = await _create_staff(client, auth_headers, name="Nurse Joy", service_type="Nurse")
    service = await _create_service(client, auth_headers)
    await _book(client, auth_headers, service["id"], "11:00", name="Later")
    await _book(client, auth_headers, service["id"], "08:00", name="Sooner")

    queue = await client.get("/queue/", headers=auth_headers)
    items = queue.json()["items"]
    assert [item["appointment"]["customer_name"] for item in items] == ["Sooner", "Later"]
    assert [item["queue_position"] for item in items] == [1, 2]

    promoted = await client.post(
        "/queue/assign", json={"staff_id": nurse["id"]}, headers=auth_headers
    )
    assert promoted.json()["assigned"] is True
    assert promoted.json()["appointment"]["customer_name"] == "Sooner"

    missing = await client.post("/queue/assign", json={"staff_id": 9999}, headers=auth_headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_delete_and_activity_feed(client, auth_headers):
    staff = await _create_staff(client, auth_headers)
    service = await _create_service(client, auth_headers)
    booked = (await _book(client, auth_headers, service["id"], "10:00", staff_id=staff["id"], name="Cy")).json()

    unchanged = await client.patch(
        f"/appointments/{booked['id']}", json={"status": "scheduled"}, headers=auth_headers
    )
    assert unchanged.status_code == 200

    changed = await client.patch(
        f"/appointments/{booked['id']}", json={"status": "no_show"}, headers=auth_headers
    )
    assert changed.json()["status"] == "no_show"

    bad_status = await client.patch(
        f"/appointments/{booked['id']}", json={"status": "lost"}, headers=auth_headers
    )
    assert bad_status.status_code == 422

    deleted = await client.delete(f"/appointments/{booked['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    gone = await client.get(f"/appointments/{booked['id']}", headers=auth_headers)
    assert gone.status_code == 404

    feed = await client.get("/activity-logs/", headers=auth_headers)
    logs = feed.json()["logs"]
    assert [log["action"] for log in logs] == ["cancelled", "status_changed", "scheduled"]
    assert logs[1]["description"] == "Status changed from scheduled to no_show"
    assert all(log["appointment"] is None for log in logs)

    limited = await client.get("/activity-logs/", params={"limit": 1}, headers=auth_headers)
    assert len(limited.json()["logs"]) == 1


@pytest.mark.asyncio
async def test_other_owner_cannot_see_appointments(client, auth_headers, other_owner, make_service, make_appointment):
    service = await make_service(other_owner)
    foreign = await make_appointment(
        other_owner, service, datetime(2030, 1, 15, 10, tzinfo=timezone.utc), status="waiting"
    )

    response = await client.get(f"/appointments/{foreign.id}", headers=auth_headers)
    assert response.status_code == 404

    listing = await client.get("/appointments/", headers=auth_headers)
    assert listing.json()["total"] == 0


@pytest.mark.asyncio
async def test_dashboard_stats(client, auth_headers):
    staff = await _create_staff(client, auth_headers, daily_capacity=4)
    service = await _create_service(client, auth_headers)
    await _book(client, auth_headers, service["id"], "09:00", staff_id=staff["id"])
    done = (await _book(client, auth_headers, service["id"], "11:00", staff_id=staff["id"])).json()
    await _book(client, auth_headers, service["id"], "13:00")
    await client.post(f"/appointments/{done['id']}/complete", headers=auth_headers)

    response = await client.get("/dashboard/stats", params={"date": DAY}, headers=auth_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["total_appointments"] == 3
    assert stats["completed_appointments"] == 1
    assert stats["pending_appointments"] == 1
    assert stats["waiting_queue_count"] == 1
    assert stats["staff_load"] == [
        {
            "staff_id": staff["id"],
            "name": "Dr. Sharma",
            "capacity": 4,
            "scheduled": 1,
            "percentage": 25.0,
        }
    ]


@pytest.mark.asyncio
async def test_demo_setup_is_idempotent(client, auth_headers):
    first = await client.post("/setup/demo", headers=auth_headers)
    assert first.status_code == 201
    assert first.json()["staff_count"] > 0

    second = await client.post("/setup/demo", headers=auth_headers)
    assert second.status_code == 200
    assert second.json()["message"] == "Demo data already exists"


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_rejected_edit_leaves_appointment_unchanged(client, auth_headers):
    staff = await _create_staff(client, auth_headers)
    service = await _create_service(client, auth_headers)
    booked = (await _book(client, auth_headers, service["id"], "10:00", staff_id=staff["id"])).json()

    rejected = await client.patch(
        f"/appointments/{booked['id']}",
        json={"status": "scheduled", "staff_id": None},
        headers=auth_headers,
    )
    assert rejected.status_code == 400
    assert rejected.json()["error"] == "validation"

    current = await client.get(f"/appointments/{booked['id']}", headers=auth_headers)
    assert current.json()["status"] == "scheduled"
    assert current.json()["staff_id"] == staff["id"]


@pytest.mark.asyncio
async def test_appointment_activity_history(client, auth_headers):
    service = await _create_service(client, auth_headers)
    staff = await _create_staff(client, auth_headers)
    queued = (await _book(client, auth_headers, service["id"], "10:00", name="Dee")).json()
    await _book(client, auth_headers, service["id"], "11:00", name="Other")
    await client.patch(
        f"/appointments/{queued['id']}", json={"staff_id": staff["id"]}, headers=auth_headers
    )

    response = await client.get(f"/appointments/{queued['id']}/activity", headers=auth_headers)
    assert response.status_code == 200
    logs = response.json()["logs"]
    assert [log["action"] for log in logs] == ["queued", "status_changed"]
    assert logs[0]["description"] == 'Appointment for "Dee" added to queue'
    assert all(log["appointment"]["id"] == queued["id"] for log in logs)

    missing = await client.get("/appointments/9999/activity", headers=auth_headers)
    assert missing.status_code == 404
