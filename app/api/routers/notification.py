"""Endpoints de `notification` (listar e marcar como lida)."""
from fastapi import APIRouter, HTTPException, Query
from app.api.schemas.notification import NotificationListOut, NotificationOut, NotificationReadOut
from app.services.notification_service import list_notifications, mark_as_read


router = APIRouter(prefix="/notification", tags=["Notification"])


@router.get("", response_model=NotificationListOut, summary="Listar notificações")
def get_notifications(
    user_id: str = Query(..., min_length=1),
    only_new: bool = Query(default=False),
) -> NotificationListOut:
    try:
        res = list_notifications(user_id, only_new=only_new)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"List notification failed: {e}")
    return NotificationListOut(
        notifications=[NotificationOut(**n) for n in res["notifications"]],
        count_new=res["count_new"],
    )


@router.patch("/{notification_id}/read", response_model=NotificationReadOut, summary="Marcar como lida")
def patch_read(notification_id: str, user_id: str = Query(..., min_length=1)) -> NotificationReadOut:
    res = mark_as_read(notification_id, user_id)
    if not res["ok"]:
        raise HTTPException(status_code=404, detail="Notificação não encontrada")
    return NotificationReadOut(**res)
