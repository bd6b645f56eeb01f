"""
Service layer for notifications.
"""
from typing import Dict, Any

from app.repositories import notification_repo


def list_notifications(user_id: str, only_new: bool = False) -> Dict[str, Any]:
    items = notification_repo.list_by_user_id(user_id, only_new=only_new)
    return {"notifications": items, "count_new": notification_repo.count_new_by_user_id(user_id)}


def mark_as_read(notification_id: str, user_id: str) -> Dict[str, Any]:
    """Marca como lida e devolve o novo total de não lidas (None se não achou)."""
    if not notification_repo.mark_as_read(notification_id, user_id):
        return {"ok": False, "count_new": None}
    return {"ok": True, "count_new": notification_repo.count_new_by_user_id(user_id)}
