"""Agregador de routers da API."""
from fastapi import APIRouter
from app.api.routers import health, note, notification, realtime, routine

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(note.router)
api_router.include_router(routine.router)
api_router.include_router(notification.router)
api_router.include_router(realtime.router)
