"""Esquemas de `notification`."""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel


class NotificationOut(BaseModel):
    id: str
    user_id: str
    title: str
    entity: str
    id_entity: Optional[str] = None
    path: Optional[str] = None
    type_of_action: str
    payload: Optional[Dict[str, Any]] = None
    is_new: bool
    created_at: str
    read_at: Optional[str] = None


class NotificationListOut(BaseModel):
    notifications: List[NotificationOut]
    count_new: int


class NotificationReadOut(BaseModel):
    ok: bool
    count_new: int
