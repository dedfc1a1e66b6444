from __future__ import annotations

import pytest

from src.worktime.worktime.main import create_app

ADMIN = {"X-Role": "admin"}


@pytest.fixture
def client(container):
    app = create_app(container)
    return app.test_client()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["active_sessions"] == 0


def test_clock_in_then_out(client, clock):
    resp = client.post("/api/clock-in", json={"actor_id": "u1", "tenant_id": "T", "display_name": "Ana"})
    assert resp.status_code == 200
    assert resp.get_json()["start_time"] == clock.now.isoformat()

    clock.advance(hours=2, minutes=30)
    resp = client.post("/api/clock-out", json={"actor_id": "u1", "tenant_id": "T"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["duration"] == "2h 30m"
    assert body["total"] == "2h 30m"
    assert body["session"]["duration_hours"] == 2.5
    assert body["summary"]["title"] == "Your Work Session Summary"


def test_double_clock_in_conflict(client):
    client.post("/api/clock-in", json={"actor_id": "u1", "tenant_id": "T"})
    resp = client.post("/api/clock-in", json={"actor_id": "u1", "tenant_id": "T"})

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "already_active"


def test_clock_out_without_session(client):
    resp = client.post("/api/clock-out", json={"actor_id": "u1", "tenant_id": "T"})

    assert resp.status_code == 409
    assert resp.get_json()["error"] == "not_active"


def test_clock_out_reports_persistence_failure(client, sessions):
    client.post("/api/clock-in", json={"actor_id": "u1", "tenant_id": "T"})
    sessions.fail_append = True

    resp = client.post("/api/clock-out", json={"actor_id": "u1", "tenant_id": "T"})

    assert resp.status_code == 500
    assert resp.get_json()["error"] == "persistence"


def test_missing_ids_are_bad_requests(client):
    resp = client.post("/api/clock-in", json={"tenant_id": "T"})
    assert resp.status_code == 400


def test_status_is_admin_only(client):
    assert client.get("/api/status").status_code == 403

    resp = client.get("/api/status", headers=ADMIN)
    assert resp.status_code == 200
    assert resp.get_json()["active"] == []


def test_status_lists_clocked_in_members(client, clock):
    client.post("/api/clock-in", json={"actor_id": "u1", "tenant_id": "T", "display_name": "Ana"})
    clock.advance(minutes=45)

    active = client.get("/api/status", headers=ADMIN).get_json()["active"]

    assert active == [
        {"actor_id": "u1", "display_name": "Ana", "since": "2026-10-12T10:00:00", "elapsed": "0h 45m"}
    ]


def test_configure_channels_and_read_notices(client):
    resp = client.put("/api/guilds/T/channels/admin-log", json={"channel_id": "c1"}, headers=ADMIN)
    assert resp.status_code == 200
    assert resp.get_json()["config"]["admin_log_channel_id"] == "c1"

    client.post("/api/clock-in", json={"actor_id": "u1", "tenant_id": "T", "display_name": "Ana"})

    notices = client.get("/api/channels/c1/notices").get_json()["notices"]
    assert [n["title"] for n in notices] == ["Work Session Started"]
    assert notices[0]["footer"] == "ID: u1"


def test_configure_requires_admin_and_known_field(client):
    assert client.put("/api/guilds/T/channels/log", json={"channel_id": "c1"}).status_code == 403
    assert client.put("/api/guilds/T/channels/bogus", json={"channel_id": "c1"}, headers=ADMIN).status_code == 404


def test_guild_config_is_created_lazily(client):
    resp = client.get("/api/guilds/NEW/config")

    assert resp.status_code == 200
    assert resp.get_json()["config"] == {
        "tenant_id": "NEW",
        "log_channel_id": None,
        "admin_log_channel_id": None,
        "weekly_summary_channel_id": None,
    }


def test_panel_needs_registered_channel(client):
    assert client.post("/api/guilds/T/panel", json={"channel_id": "c9"}).status_code == 404

    client.put("/api/guilds/T/channels/log", json={"channel_id": "c9"}, headers=ADMIN)
    assert client.post("/api/guilds/T/panel", json={"channel_id": "c9"}).status_code == 200


def test_member_directory_roundtrip(client):
    assert client.get("/api/members/u1").status_code == 404

    client.put("/api/members/u1", json={"display_name": "Ana"})

    assert client.get("/api/members/u1").get_json()["display_name"] == "Ana"
