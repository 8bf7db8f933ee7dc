# backend/tests/modules/timers/test_timer_routes.py

from datetime import datetime
from unittest.mock import patch

from tests.factories import PickupTimerFactory, ShippingTimerFactory

NOW = datetime(2026, 3, 2, 13, 40)


def test_available_slots_are_public(client):
    PickupTimerFactory(day_of_week=1, time="14:00")
    PickupTimerFactory(day_of_week=1, time="15:00")

    with patch("modules.timers.services.timer_service.shop_now", return_value=NOW):
        response = client.get("/api/timers/pickup/available")

    assert response.status_code == 200
    data = response.json()
    assert [s["time"] for s in data] == ["15:00"]
    assert data[0]["scheduled_at"].startswith("2026-03-02T15:00")


def test_cutoff_override(client):
    PickupTimerFactory(day_of_week=1, time="14:15")
    PickupTimerFactory(day_of_week=1, time="15:00")

    with patch("modules.timers.services.timer_service.shop_now", return_value=NOW):
        response = client.get("/api/timers/pickup/available", params={"cutoff_minutes": 45})

    assert [s["time"] for s in response.json()] == ["15:00"]


def test_slot_flag_refreshed_on_read(client):
    slot = PickupTimerFactory(day_of_week=1, time="14:00", active=False)

    with patch(
        "modules.timers.services.timer_service.shop_now",
        return_value=datetime(2026, 3, 2, 14, 0),
    ):
        response = client.get("/api/timers/pickup/available")

    assert [s["id"] for s in response.json()] == [slot.id]


def test_unknown_kind_is_422(client):
    assert client.get("/api/timers/drone/available").status_code == 422


def test_admin_crud(admin_client):
    created = admin_client.post(
        "/api/timers/shipping", json={"day_of_week": 5, "time": "19:30"}
    )
    assert created.status_code == 201
    slot_id = created.json()["id"]

    updated = admin_client.patch(f"/api/timers/shipping/{slot_id}", json={"time": "20:00"})
    assert updated.json()["time"] == "20:00"

    listed = admin_client.get("/api/timers/shipping", params={"day": 5})
    assert [s["id"] for s in listed.json()] == [slot_id]

    assert admin_client.delete(f"/api/timers/shipping/{slot_id}").status_code == 204
    assert admin_client.get("/api/timers/shipping").json() == []


def test_admin_routes_require_token(client):
    assert client.get("/api/timers/pickup").status_code == 401
    assert client.post("/api/timers/recompute").status_code == 401


def test_recompute_reports_changes(admin_client):
    ShippingTimerFactory(day_of_week=1, time="14:30", active=True)

    with patch("modules.timers.routes.timer_routes.shop_now", return_value=NOW):
        response = admin_client.post("/api/timers/recompute")

    assert response.status_code == 200
    assert response.json()["changed"] == {"pickup": 0, "shipping": 1}
