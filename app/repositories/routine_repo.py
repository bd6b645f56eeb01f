"""Repo da coleção `routine`."""
from typing import Dict, Any
from app.core.time import now_iso
from app.infrastructure.db.mongo import get_db

COLLECTION = "routine"


def insert_routine(doc: Dict[str, Any]) -> Dict[str, Any]:
    db = get_db()
    data = dict(doc)
    now = now_iso()
    data.setdefault("description", None)
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = db[COLLECTION].insert_one(data)
    data["id"] = str(res.inserted_id)
    data.pop("_id", None)
    return data


def find_by_user_id(user_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
    """Página de rotinas do usuário (mais antigas primeiro) e o total."""
    db = get_db()
    filtro = {"user_id": str(user_id)}
    page = max(page, 1)
    limit = max(limit, 1)
    cursor = (
        db[COLLECTION]
        .find(filtro)
        .sort("created_at", 1)
        .skip((page - 1) * limit)
        .limit(limit)
    )
    routines = []
    for d in cursor:
        d = dict(d)
        d["id"] = str(d.pop("_id", ""))
        routines.append(d)
    return {"routines": routines, "total": db[COLLECTION].count_documents(filtro)}
