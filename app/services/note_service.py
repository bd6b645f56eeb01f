"""
Service layer for notes: thin wrappers over repositories.
"""
from typing import Dict, Any, List, Optional

from app.repositories import note_repo


def insert_note(doc: Dict[str, Any]) -> Dict[str, Any]:
    return note_repo.insert_note(doc)


def list_notes(user_id: str, date: Optional[str] = None) -> List[Dict[str, Any]]:
    return note_repo.list_notes(user_id=user_id, date=date)
