"""Repo da coleção `notification`.

- Toda notificação nasce com `is_new=True`; marcar como lida sela `read_at`.
"""
from typing import Dict, Any, List
from bson import ObjectId
from bson.errors import InvalidId
from app.core.time import now_iso
from app.infrastructure.db.mongo import get_db

COLLECTION = "notification"


def insert_notification(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Insere notificação e devolve o documento salvo (com `id`)."""
    db = get_db()
    data = dict(doc)
    data.setdefault("payload", None)
    data["is_new"] = True
    data["read_at"] = None
    data.setdefault("created_at", now_iso())
    res = db[COLLECTION].insert_one(data)
    data["id"] = str(res.inserted_id)
    data.pop("_id", None)
    return data


def count_new_by_user_id(user_id: str) -> int:
    return get_db()[COLLECTION].count_documents({"user_id": str(user_id), "is_new": True})


def list_by_user_id(user_id: str, only_new: bool = False, limit: int = 50) -> List[Dict[str, Any]]:
    db = get_db()
    filtro: Dict[str, Any] = {"user_id": str(user_id)}
    if only_new:
        filtro["is_new"] = True
    out: List[Dict[str, Any]] = []
    for d in db[COLLECTION].find(filtro).sort("created_at", -1).limit(limit):
        d = dict(d)
        d["id"] = str(d.pop("_id", ""))
        out.append(d)
    return out


def mark_as_read(notification_id: str, user_id: str) -> bool:
    """Marca como lida; False se não existir (ou não for do usuário)."""
    try:
        oid = ObjectId(notification_id)
    except (InvalidId, TypeError):
        return False
    res = get_db()[COLLECTION].update_one(
        {"_id": oid, "user_id": str(user_id)},
        {"$set": {"is_new": False, "read_at": now_iso()}},
    )
    return res.matched_count > 0
