"""
Esquemas do resumo do dia (entrada validada e resposta).
"""
from typing import Optional
from pydantic import BaseModel, field_validator

from app.core.time import parse_iso_date


class DaySummaryCreate(BaseModel):
    user_id: str
    date: str
    routine_id: Optional[str] = None

    @field_validator("user_id")
    @classmethod
    def _check_user_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("userId é obrigatório")
        return v

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str) -> str:
        v = v.strip()
        try:
            parse_iso_date(v)
        except ValueError:
            raise ValueError("data deve estar no formato AAAA-MM-DD")
        return v

    @field_validator("routine_id")
    @classmethod
    def _blank_routine_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class DaySummaryOut(BaseModel):
    message: str
    summary: str
