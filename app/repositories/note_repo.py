"""Repo da coleção `note`.

- Guarda `user_id`/`routine_id` como string.
- Notas de resumo do dia carregam `summary_day` e `summary_date` (DD/MM/AAAA);
  as consultas de notas do dia nunca as devolvem.
"""
from typing import Dict, Any, List, Optional
from bson import ObjectId
from bson.errors import InvalidId
from app.core.time import now_iso
from app.infrastructure.db.mongo import get_db

COLLECTION = "note"


def _out(doc: Dict[str, Any]) -> Dict[str, Any]:
    d = dict(doc)
    d["id"] = str(d.pop("_id", ""))
    return d


def _oid(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def insert_note(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Insere nota com defaults e devolve o documento salvo (com `id`)."""
    db = get_db()
    data = dict(doc)
    now = now_iso()
    data.setdefault("status", "")
    data.setdefault("priority", "")
    data.setdefault("collaborators", [])
    data.setdefault("comments", [])
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = db[COLLECTION].insert_one(data)
    data["_id"] = res.inserted_id
    return _out(data)


def find_by_user_and_date(user_id: str, date: str) -> List[Dict[str, Any]]:
    """Notas do usuário no dia `date` (AAAA-MM-DD), sem resumos, por horário."""
    db = get_db()
    filtro = {"user_id": str(user_id), "date": date, "summary_day": None}
    docs = db[COLLECTION].find(filtro).sort([("start_time", 1), ("created_at", 1)])
    return [_out(d) for d in docs]


def list_notes(user_id: str, date: Optional[str] = None) -> List[Dict[str, Any]]:
    """Lista notas do usuário (inclui resumos), mais recentes primeiro."""
    db = get_db()
    filtro: Dict[str, Any] = {"user_id": str(user_id)}
    if date:
        filtro["date"] = date
    return [_out(d) for d in db[COLLECTION].find(filtro).sort("updated_at", -1)]


def find_summary_by_user_and_date(user_id: str, formatted_date: str) -> Optional[Dict[str, Any]]:
    """Resumo do dia já gerado para `formatted_date` (DD/MM/AAAA), se houver."""
    db = get_db()
    doc = db[COLLECTION].find_one({"user_id": str(user_id), "summary_date": formatted_date})
    return _out(doc) if doc else None


def delete_note(note_id: str, user_id: str) -> bool:
    """Remove a nota do usuário; False se não existir."""
    oid = _oid(note_id)
    if oid is None:
        return False
    res = get_db()[COLLECTION].delete_one({"_id": oid, "user_id": str(user_id)})
    return res.deleted_count > 0
