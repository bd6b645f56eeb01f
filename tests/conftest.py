"""Fixtures compartilhadas.

Os repositórios são trocados por um armazenamento em memória (`FakeStore`)
via monkeypatch, então nenhum teste precisa de um Mongo real.
"""
import itertools
from typing import Any, Dict, List, Optional

import pytest
from starlette.testclient import TestClient

from app.core.time import now_iso
from app.infrastructure.realtime import hub as hub_module
from app.repositories import note_repo, notification_repo, routine_repo


class FakeStore:
    """Implementa as funções dos repos sobre listas em memória."""

    def __init__(self) -> None:
        self.notes: List[Dict[str, Any]] = []
        self.routines: List[Dict[str, Any]] = []
        self.notifications: List[Dict[str, Any]] = []
        self.deleted: List[str] = []
        self._ids = itertools.count(1)

    def _next_id(self) -> str:
        return f"{next(self._ids):024x}"

    # note_repo
    def insert_note(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(doc)
        now = now_iso()
        data.setdefault("status", "")
        data.setdefault("priority", "")
        data.setdefault("collaborators", [])
        data.setdefault("comments", [])
        data.setdefault("created_at", now)
        data["updated_at"] = now
        data["id"] = self._next_id()
        self.notes.append(data)
        return dict(data)

    def find_by_user_and_date(self, user_id: str, date: str) -> List[Dict[str, Any]]:
        return [
            dict(n) for n in self.notes
            if n["user_id"] == user_id and n.get("date") == date and n.get("summary_day") is None
        ]

    def list_notes(self, user_id: str, date: Optional[str] = None) -> List[Dict[str, Any]]:
        return [dict(n) for n in self.notes if n["user_id"] == user_id and (not date or n.get("date") == date)]

    def find_summary_by_user_and_date(self, user_id: str, formatted_date: str) -> Optional[Dict[str, Any]]:
        for n in self.notes:
            if n["user_id"] == user_id and n.get("summary_date") == formatted_date:
                return dict(n)
        return None

    def delete_note(self, note_id: str, user_id: str) -> bool:
        before = len(self.notes)
        self.notes = [n for n in self.notes if not (n["id"] == note_id and n["user_id"] == user_id)]
        if len(self.notes) < before:
            self.deleted.append(note_id)
            return True
        return False

    # routine_repo
    def insert_routine(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(doc)
        now = now_iso()
        data.setdefault("description", None)
        data.setdefault("created_at", now)
        data["updated_at"] = now
        data["id"] = self._next_id()
        self.routines.append(data)
        return dict(data)

    def find_routines(self, user_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        mine = [dict(r) for r in self.routines if r["user_id"] == user_id]
        start = (page - 1) * limit
        return {"routines": mine[start:start + limit], "total": len(mine)}

    # notification_repo
    def insert_notification(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        data = dict(doc)
        data.setdefault("payload", None)
        data["is_new"] = True
        data["read_at"] = None
        data.setdefault("created_at", now_iso())
        data["id"] = self._next_id()
        self.notifications.append(data)
        return dict(data)

    def count_new_by_user_id(self, user_id: str) -> int:
        return sum(1 for n in self.notifications if n["user_id"] == user_id and n["is_new"])

    def list_notifications(self, user_id: str, only_new: bool = False, limit: int = 50) -> List[Dict[str, Any]]:
        mine = [dict(n) for n in reversed(self.notifications) if n["user_id"] == user_id]
        if only_new:
            mine = [n for n in mine if n["is_new"]]
        return mine[:limit]

    def mark_as_read(self, notification_id: str, user_id: str) -> bool:
        for n in self.notifications:
            if n["id"] == notification_id and n["user_id"] == user_id:
                n["is_new"] = False
                n["read_at"] = now_iso()
                return True
        return False


@pytest.fixture
def store(monkeypatch) -> FakeStore:
    s = FakeStore()
    monkeypatch.setattr(note_repo, "insert_note", s.insert_note)
    monkeypatch.setattr(note_repo, "find_by_user_and_date", s.find_by_user_and_date)
    monkeypatch.setattr(note_repo, "list_notes", s.list_notes)
    monkeypatch.setattr(note_repo, "find_summary_by_user_and_date", s.find_summary_by_user_and_date)
    monkeypatch.setattr(note_repo, "delete_note", s.delete_note)
    monkeypatch.setattr(routine_repo, "insert_routine", s.insert_routine)
    monkeypatch.setattr(routine_repo, "find_by_user_id", s.find_routines)
    monkeypatch.setattr(notification_repo, "insert_notification", s.insert_notification)
    monkeypatch.setattr(notification_repo, "count_new_by_user_id", s.count_new_by_user_id)
    monkeypatch.setattr(notification_repo, "list_by_user_id", s.list_notifications)
    monkeypatch.setattr(notification_repo, "mark_as_read", s.mark_as_read)
    return s


@pytest.fixture(autouse=True)
def reset_hub():
    hub_module.reset_realtime()
    yield
    hub_module.reset_realtime()


@pytest.fixture
def client(store, monkeypatch):
    """TestClient com startup sem Mongo (o hub realtime sobe normalmente)."""
    from app import main

    monkeypatch.setattr(main, "init_mongo", lambda: None)
    monkeypatch.setattr(main, "db_ready", lambda: False)
    monkeypatch.setattr(main, "close_mongo", lambda: None)
    with TestClient(main.app) as c:
        yield c


def make_note(**overrides: Any) -> Dict[str, Any]:
    note: Dict[str, Any] = {
        "user_id": "user-1",
        "date": "2026-10-18",
        "activity": "Atividade",
        "description": None,
        "status": "",
        "priority": "",
        "activity_type": None,
        "start_time": None,
        "end_time": None,
        "collaborators": [],
        "comments": [],
    }
    note.update(overrides)
    return note


@pytest.fixture(name="make_note")
def make_note_fixture():
    return make_note
