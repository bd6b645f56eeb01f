"""Esquemas de `routine`."""
from typing import List, Optional
from pydantic import BaseModel, Field


class RoutineCreate(BaseModel):
    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: Optional[str] = None


class RoutineOut(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    created_at: str
    updated_at: str


class RoutineListOut(BaseModel):
    routines: List[RoutineOut]
    total: int
    page: int
    limit: int
