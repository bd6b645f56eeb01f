"""Entrada principal da app FastAPI (middlewares, exceções, routers e realtime)."""
from fastapi import FastAPI
from app.core.config import settings
from app.infrastructure.db.mongo import init_mongo, db_ready, close_mongo
from app.infrastructure.db.bootstrap import ensure_collections
from app.infrastructure.realtime.hub import init_realtime
from app.api.router import api_router
from app.core.logging import setup_logging
from app.core.middleware import add_middlewares
from app.core.exceptions import register_exception_handlers
import logging

_log = logging.getLogger("rotina.startup")

setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name)

add_middlewares(app)
register_exception_handlers(app)


@app.on_event("startup")
def on_startup():
    init_mongo()
    init_realtime()
    # Garante coleções/índices/validadores mínimos se houver conexão
    if db_ready():
        ensure_collections()
    else:
        _log.warning("Mongo não está pronto; pulando ensure_collections()")


@app.on_event("shutdown")
def on_shutdown():
    close_mongo()


# Monta routers sob o prefixo configurado
app.include_router(api_router, prefix=settings.api_prefix_normalized)
