"""Hub de tempo real (WebSocket) com salas por usuário.

Cada cliente conectado entra na sala `user_{user_id}`. `emit` envia um frame
JSON `{"event": ..., "data": ...}` para todos os sockets da sala e descarta
os que falharem. O hub vive no processo: sem fan-out entre workers.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket

from app.core.config import settings

_log = logging.getLogger("rotina.realtime")


def user_room(user_id: str) -> str:
    return f"user_{user_id}"


class RealtimeHub:
    def __init__(self) -> None:
        self._rooms: Dict[str, Set[WebSocket]] = {}
        self._lock = asyncio.Lock()

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._rooms.setdefault(user_room(user_id), set()).add(websocket)
        _log.info("WebSocket conectado user_id=%s", user_id)

    async def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            self._discard(user_room(user_id), websocket)
        _log.info("WebSocket desconectado user_id=%s", user_id)

    def _discard(self, room: str, websocket: WebSocket) -> None:
        sockets = self._rooms.get(room)
        if not sockets:
            return
        sockets.discard(websocket)
        if not sockets:
            self._rooms.pop(room, None)

    def connections(self, room: str) -> int:
        return len(self._rooms.get(room, ()))

    async def emit(self, room: str, event: str, data: Any) -> int:
        """Envia `event` para a sala; devolve quantos sockets receberam."""
        async with self._lock:
            targets = list(self._rooms.get(room, ()))
        frame = {"event": event, "data": data}
        sent = 0
        for ws in targets:
            try:
                await ws.send_json(frame)
                sent += 1
            except Exception as e:  # socket morto/fechado: remove e segue
                _log.warning("Falha ao enviar '%s' para %s: %s", event, room, e)
                async with self._lock:
                    self._discard(room, ws)
        return sent


_hub: Optional[RealtimeHub] = None


def init_realtime() -> Optional[RealtimeHub]:
    """Cria o hub do processo (se habilitado em config)."""
    global _hub
    if not settings.realtime_enabled:
        _log.warning("Realtime desabilitado por configuração")
        _hub = None
        return None
    if _hub is None:
        _hub = RealtimeHub()
        _log.info("Realtime hub pronto")
    return _hub


def get_hub() -> Optional[RealtimeHub]:
    return _hub


def reset_realtime() -> None:
    global _hub
    _hub = None
