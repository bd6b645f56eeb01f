"""HTTP and WebSocket tests over the FastAPI app (repos in memory)."""

import time

import pytest

from app.infrastructure.realtime.hub import get_hub, user_room


def _wait_for_connection(room: str, timeout: float = 2.0) -> None:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        hub = get_hub()
        if hub is not None and hub.connections(room) > 0:
            return
        time.sleep(0.01)
    raise AssertionError(f"nenhum socket conectado em {room}")


def _create_routine(client, user_id="user-1"):
    resp = client.post("/api/routine", json={"user_id": user_id, "name": "Trabalho"})
    assert resp.status_code == 201
    return resp.json()


def _create_note(client, **fields):
    body = {
        "user_id": "user-1",
        "activity": "Reunião de equipe",
        "date": "2026-10-18",
        "status": "Concluído",
        "priority": "Alta",
        "start_time": "09:00:00",
        "end_time": "10:00:00",
        "collaborators": ["Ana"],
    }
    body.update(fields)
    resp = client.post("/api/note", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


def test_ping_and_health(client):
    assert client.get("/api/ping").json() == {"message": "pong"}
    assert client.get("/api/health").json() == {"ok": True, "mongo": False, "realtime": True}


def test_request_id_is_echoed(client):
    resp = client.get("/api/ping", headers={"X-Request-Id": "abc123"})
    assert resp.headers["X-Request-Id"] == "abc123"


# ---------------------------------------------------------------------------
# Notes / routines
# ---------------------------------------------------------------------------


def test_create_and_list_notes(client):
    created = _create_note(client)
    assert created["message"] == "ok"
    assert created["data"]["activity"] == "Reunião de equipe"

    resp = client.get("/api/note", params={"user_id": "user-1", "date": "2026-10-18"})
    assert resp.status_code == 200
    assert [n["id"] for n in resp.json()["note"]] == [created["id"]]


@pytest.mark.parametrize("bad_date", ["2026-13-01", "2026-1-5", "18/10/2026"])
def test_create_note_rejects_bad_date(client, bad_date):
    resp = client.post(
        "/api/note",
        json={"user_id": "user-1", "activity": "x", "date": bad_date},
    )
    assert resp.status_code == 422
    assert resp.json()["message"] == "Validation error"


def test_routine_pagination(client):
    for _ in range(3):
        _create_routine(client)
    body = client.get("/api/routine", params={"user_id": "user-1", "page": 2, "limit": 2}).json()
    assert body["total"] == 3
    assert len(body["routines"]) == 1


# ---------------------------------------------------------------------------
# Resumo do dia
# ---------------------------------------------------------------------------


def test_summary_day_without_notes(client):
    resp = client.post("/api/note/summary-day", json={"user_id": "user-1", "date": "2026-10-18"})
    assert resp.status_code == 200
    assert resp.json() == {"message": "ok", "summary": "Nenhuma nota encontrada para esta data."}


def test_summary_day_invalid_date(client):
    resp = client.post("/api/note/summary-day", json={"user_id": "user-1", "date": "18-10-2026"})
    assert resp.status_code == 422
    body = resp.json()
    assert body["message"] == "Validation error"
    assert body["errors"][0]["loc"][-1] == "date"


def test_summary_day_without_routine_is_500(client):
    _create_note(client)
    resp = client.post("/api/note/summary-day", json={"user_id": "user-1", "date": "2026-10-18"})
    assert resp.status_code == 500
    body = resp.json()
    assert body["message"].startswith("Falha na criação do resumo do dia: Nenhuma rotina encontrada")
    assert "request_id" in body


def test_summary_day_pushes_notification_over_websocket(client, store):
    _create_routine(client)
    _create_note(client)
    _create_note(client, activity="Deploy", status="Não realizado", priority="Urgente", start_time="20:00:00")

    with client.websocket_connect("/api/ws/notifications?user_id=user-1") as ws:
        _wait_for_connection(user_room("user-1"))

        resp = client.post("/api/note/summary-day", json={"user_id": "user-1", "date": "2026-10-18"})
        assert resp.status_code == 200
        summary = resp.json()["summary"]

        frame = ws.receive_json()

    assert frame["event"] == "newNotification"
    data = frame["data"]
    assert data["title"] == "Resumo do dia gerado: 18/10/2026"
    assert data["entity"] == "Anotação"
    assert data["path"] == "/anotacoes"
    assert data["count_new_notification"] == 1
    assert data["payload"]["summary"] == summary
    assert data["payload"]["total_notes"] == 2

    listed = client.get("/api/note", params={"user_id": "user-1"}).json()["note"]
    summary_notes = [n for n in listed if n["summary_day"]]
    assert len(summary_notes) == 1
    assert summary_notes[0]["id"] == data["id_entity"]


def test_summary_day_regenerated_keeps_single_summary_note(client, store):
    _create_routine(client)
    _create_note(client)

    for _ in range(2):
        resp = client.post("/api/note/summary-day", json={"user_id": "user-1", "date": "2026-10-18"})
        assert resp.status_code == 200

    assert len([n for n in store.notes if n.get("summary_day")]) == 1
    assert len(store.notifications) == 2


# ---------------------------------------------------------------------------
# Notificações
# ---------------------------------------------------------------------------


def test_notifications_list_and_mark_read(client):
    _create_routine(client)
    _create_note(client)
    client.post("/api/note/summary-day", json={"user_id": "user-1", "date": "2026-10-18"})

    body = client.get("/api/notification", params={"user_id": "user-1"}).json()
    assert body["count_new"] == 1
    notif_id = body["notifications"][0]["id"]

    resp = client.patch(f"/api/notification/{notif_id}/read", params={"user_id": "user-1"})
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "count_new": 0}

    only_new = client.get("/api/notification", params={"user_id": "user-1", "only_new": True}).json()
    assert only_new["notifications"] == []


def test_mark_read_unknown_notification(client):
    resp = client.patch("/api/notification/nao-existe/read", params={"user_id": "user-1"})
    assert resp.status_code == 404
    assert resp.json()["message"] == "Notificação não encontrada"
