"""Cliente MongoDB síncrono (pymongo) compartilhado pelos repositórios."""
from __future__ import annotations

import logging
from typing import Optional

import certifi
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from app.core.config import settings

_log = logging.getLogger("rotina.mongo")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None


def _client_kwargs(uri: str) -> dict:
    kwargs = dict(serverSelectionTimeoutMS=settings.mongo_timeout_ms)
    if uri.startswith("mongodb+srv://"):
        # SRV já implica TLS; fornece o bundle de CAs do certifi
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        kwargs["tlsAllowInvalidCertificates"] = settings.mongo_tls_insecure
        kwargs["tlsAllowInvalidHostnames"] = settings.mongo_tls_allow_invalid_hostnames
    return kwargs


def init_mongo() -> None:
    """
    Inicializa o cliente e valida a conexão (ping).
    Chamar uma vez no startup do FastAPI; não derruba a app se o Mongo estiver fora.
    """
    global _client, _db
    uri = settings.mongo_uri
    try:
        _client = MongoClient(uri, **_client_kwargs(uri))
        _client.admin.command("ping")
        _db = _client[settings.mongo_db]
        _log.info("Mongo conectado (db=%s)", settings.mongo_db)
    except ServerSelectionTimeoutError as e:
        _log.warning("Mongo inacessível (timeout): %s", e)
        _client = None
        _db = None
    except PyMongoError as e:
        _log.warning("Erro de conexão com Mongo: %s", e)
        _client = None
        _db = None


def get_db() -> Database:
    """
    Devolve a referência ao banco.
    Use nos repositórios, não nos routers.
    """
    if _db is None:
        raise RuntimeError("Mongo não inicializado. Tente mais tarde.")
    return _db


def db_ready() -> bool:
    return _db is not None


def close_mongo() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
