"""
Esquemas Pydantic para `note` (anotações de atividades do dia).
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

from app.core.time import parse_iso_date


class NoteComment(BaseModel):
    text: str
    author: str


class NoteCreate(BaseModel):
    user_id: str = Field(min_length=1)
    routine_id: Optional[str] = None
    activity: str = Field(min_length=1)
    description: Optional[str] = None
    status: str = ""
    priority: str = ""
    activity_type: Optional[str] = None
    date: str
    start_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    end_time: Optional[str] = Field(default=None, pattern=r"^\d{2}:\d{2}(:\d{2})?$")
    collaborators: List[str] = Field(default_factory=list)
    comments: List[NoteComment] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def _check_date(cls, v: str) -> str:
        parse_iso_date(v)
        return v

    @field_validator("collaborators")
    @classmethod
    def _strip_collaborators(cls, v: List[str]) -> List[str]:
        return [c.strip() for c in (v or []) if c and c.strip()]


class NoteOut(BaseModel):
    id: str
    user_id: str
    routine_id: Optional[str] = None
    activity: str
    description: Optional[str] = None
    status: str = ""
    priority: str = ""
    activity_type: Optional[str] = None
    date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    collaborators: List[str] = Field(default_factory=list)
    comments: List[NoteComment] = Field(default_factory=list)
    summary_day: Optional[str] = None
    summary_date: Optional[str] = None
    created_at: str
    updated_at: str


class NoteCreateResponse(BaseModel):
    message: str
    id: str
    data: NoteOut


class NoteListOut(BaseModel):
    note: List[NoteOut]
