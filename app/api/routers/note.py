"""
Endpoints de `note`: anotações do dia e geração do resumo do dia.
"""
from fastapi import APIRouter, HTTPException, status, Query
from typing import Optional
from app.api.schemas.note import NoteCreate, NoteOut, NoteCreateResponse, NoteListOut
from app.api.schemas.day_summary import DaySummaryCreate, DaySummaryOut
from app.services.note_service import insert_note, list_notes
from app.services.day_summary_service import create_day_summary


router = APIRouter(prefix="/note", tags=["Note"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteCreateResponse,
    summary="Criar nota",
    description="Cria uma anotação de atividade do usuário para um dia.",
)
def create_note(payload: NoteCreate) -> NoteCreateResponse:
    try:
        saved = insert_note(payload.model_dump(mode="json"))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Insert note failed: {e}")
    return NoteCreateResponse(message="ok", id=saved["id"], data=NoteOut(**saved))


@router.get(
    "",
    response_model=NoteListOut,
    summary="Listar notas",
    description="Lista notas do usuário, opcionalmente de um dia (AAAA-MM-DD).",
)
def get_notes(
    user_id: str = Query(..., min_length=1),
    date: Optional[str] = Query(default=None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
) -> NoteListOut:
    try:
        items = list_notes(user_id=user_id, date=date)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"List note failed: {e}")
    return NoteListOut(note=[NoteOut(**i) for i in items])


@router.post(
    "/summary-day",
    response_model=DaySummaryOut,
    summary="Gerar resumo do dia",
    description=(
        "Gera o resumo em Markdown das notas do dia, salva como nota de resumo, "
        "cria a notificação e a envia em tempo real aos clientes conectados."
    ),
)
async def post_summary_day(payload: DaySummaryCreate) -> DaySummaryOut:
    summary = await create_day_summary(payload)
    return DaySummaryOut(message="ok", summary=summary)
