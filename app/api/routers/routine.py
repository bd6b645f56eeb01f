"""Endpoints de `routine`."""
from fastapi import APIRouter, HTTPException, status, Query
from app.api.schemas.routine import RoutineCreate, RoutineOut, RoutineListOut
from app.services.routine_service import insert_routine, list_routines


router = APIRouter(prefix="/routine", tags=["Routine"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=RoutineOut, summary="Criar rotina")
def create_routine(payload: RoutineCreate) -> RoutineOut:
    try:
        return RoutineOut(**insert_routine(payload.model_dump()))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Insert routine failed: {e}")


@router.get("", response_model=RoutineListOut, summary="Listar rotinas")
def get_routines(
    user_id: str = Query(..., min_length=1),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
) -> RoutineListOut:
    try:
        res = list_routines(user_id, page=page, limit=limit)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"List routine failed: {e}")
    return RoutineListOut(
        routines=[RoutineOut(**r) for r in res["routines"]],
        total=res["total"],
        page=page,
        limit=limit,
    )
