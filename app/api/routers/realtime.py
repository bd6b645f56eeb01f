"""WebSocket de notificações em tempo real.

O cliente conecta em `/ws/notifications?user_id=...` e passa a receber os
frames `{"event": "newNotification", "data": {...}}` da sala do usuário.
Mensagens recebidas do cliente são ignoradas (servem de keep-alive).
"""
from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from app.infrastructure.realtime.hub import get_hub

router = APIRouter(tags=["Realtime"])


@router.websocket("/ws/notifications")
async def notifications_ws(websocket: WebSocket, user_id: str = Query(..., min_length=1)) -> None:
    hub = get_hub()
    if hub is None:
        await websocket.close(code=status.WS_1013_TRY_AGAIN_LATER)
        return

    await hub.connect(user_id, websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await hub.disconnect(user_id, websocket)
