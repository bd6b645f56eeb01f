"""
Service layer for routines: thin wrappers over repositories.
"""
from typing import Dict, Any

from app.repositories import routine_repo


def insert_routine(doc: Dict[str, Any]) -> Dict[str, Any]:
    return routine_repo.insert_routine(doc)


def list_routines(user_id: str, page: int = 1, limit: int = 10) -> Dict[str, Any]:
    return routine_repo.find_by_user_id(user_id, page=page, limit=limit)
