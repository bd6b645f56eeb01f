"""Caso de uso: gerar o resumo do dia de um usuário.

Busca as notas do dia, renderiza o Markdown, salva como nota de resumo
(substituindo um resumo anterior da mesma data), registra a notificação e
tenta empurrá-la em tempo real para os clientes conectados do usuário.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from app.api.schemas.day_summary import DaySummaryCreate
from app.core.config import settings
from app.core.exceptions import ServerError
from app.core.time import format_date_br, now_utc, shifted_iso
from app.infrastructure.realtime.hub import get_hub, user_room
from app.repositories import note_repo, notification_repo, routine_repo
from app.services.day_summary_markdown import render_day_summary

_log = logging.getLogger("rotina.day_summary")

NO_NOTES_MESSAGE = "Nenhuma nota encontrada para esta data."
NO_ROUTINE_MESSAGE = (
    "Nenhuma rotina encontrada para este usuário. Crie uma rotina antes de gerar resumos."
)
NOTIFICATION_EVENT = "newNotification"


async def create_day_summary(data: Union[DaySummaryCreate, Mapping[str, Any]]) -> str:
    """Gera e persiste o resumo do dia; devolve o Markdown.

    `ValidationError` sobe sem alteração; qualquer outra falha vira `ServerError`.
    """
    try:
        params = data if isinstance(data, DaySummaryCreate) else DaySummaryCreate.model_validate(data)
        return await _handle(params)
    except ValidationError:
        raise
    except Exception as e:
        message = (e.message if isinstance(e, ServerError) else str(e)) or (
            "Erro interno do servidor durante a geração do resumo"
        )
        raise ServerError(f"Falha na criação do resumo do dia: {message}") from e


async def _handle(params: DaySummaryCreate) -> str:
    notes = await run_in_threadpool(note_repo.find_by_user_and_date, params.user_id, params.date)
    if not notes:
        return NO_NOTES_MESSAGE

    summary = render_day_summary(notes, params.date)

    routine_id = params.routine_id
    routine: Optional[Dict[str, Any]] = None
    if not routine_id:
        page = await run_in_threadpool(routine_repo.find_by_user_id, params.user_id, page=1, limit=1)
        if not page["routines"]:
            raise ServerError(NO_ROUTINE_MESSAGE)
        routine = page["routines"][0]
        routine_id = routine["id"]

    formatted_date = format_date_br(params.date)

    existing = await run_in_threadpool(note_repo.find_summary_by_user_and_date, params.user_id, formatted_date)
    if existing:
        await run_in_threadpool(note_repo.delete_note, existing["id"], params.user_id)
        _log.info("Resumo anterior removido user_id=%s date=%s", params.user_id, formatted_date)

    summary_note = await run_in_threadpool(note_repo.insert_note, {
        "activity": f"Resumo do Dia - {formatted_date}",
        "description": f"Resumo estruturado das atividades do dia {formatted_date}.",
        "summary_day": summary,
        "summary_date": formatted_date,
        "routine_id": routine_id,
        "user_id": params.user_id,
        "status": "",
        "priority": "",
    })

    preview_chars = settings.summary_preview_chars
    notification = await run_in_threadpool(notification_repo.insert_notification, {
        "title": f"Resumo do dia gerado: {formatted_date}",
        "entity": "Anotação",
        "id_entity": summary_note["id"],
        "user_id": params.user_id,
        "path": "/anotacoes",
        "payload": {
            "date": params.date,
            "formatted_date": formatted_date,
            "routine_id": routine_id,
            "total_notes": len(notes),
            "summary_preview": summary[:preview_chars] + "...",
            "summary": summary,
            "routine": routine,
        },
        "type_of_action": "Criação",
    })

    count_new = await run_in_threadpool(notification_repo.count_new_by_user_id, params.user_id)

    await _push_notification(params.user_id, notification, count_new)
    return summary


async def _push_notification(user_id: str, notification: Optional[Dict[str, Any]], count_new: int) -> None:
    """Entrega best-effort: sem hub ou com falha, só registra o aviso."""
    hub = get_hub()
    if hub is None or not notification:
        _log.warning("Realtime não inicializado ou notificação nula; resumo gerado sem push em tempo real")
        return

    message = {
        "id": notification["id"],
        "title": notification["title"],
        "entity": notification["entity"],
        "id_entity": notification.get("id_entity"),
        "path": notification.get("path"),
        "type_of_action": notification["type_of_action"],
        "payload": notification.get("payload"),
        "created_at": shifted_iso(now_utc(), settings.notification_clock_offset_hours),
        "count_new_notification": count_new,
    }
    try:
        sent = await hub.emit(user_room(user_id), NOTIFICATION_EVENT, message)
    except Exception as e:
        _log.warning("Falha no push em tempo real user_id=%s: %s", user_id, e)
        return
    _log.info(
        "Notificação de resumo do dia emitida user_id=%s (count=%s, sockets=%s)",
        user_id, count_new, sent,
    )
