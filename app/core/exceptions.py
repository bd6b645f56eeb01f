"""
Domain errors and global exception handlers for consistent API errors.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException


class ServerError(Exception):
    """Falha interna de um caso de uso; a mensagem é segura para o cliente."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def _body(request: Request, **content: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = dict(content)
    rid = _req_id(request)
    if rid:
        body["request_id"] = rid
    return body


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("rotina.errors")

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content=_body(request, message=exc.detail or "HTTP error"))

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        errors = jsonable_encoder(exc.errors())
        return JSONResponse(status_code=422, content=_body(request, message="Validation error", errors=errors))

    # Validação feita dentro dos serviços (fora do parsing do FastAPI)
    @app.exception_handler(ValidationError)
    async def _model_validation_handler(request: Request, exc: ValidationError):
        errors = jsonable_encoder(exc.errors(include_url=False, include_context=False))
        return JSONResponse(status_code=422, content=_body(request, message="Validation error", errors=errors))

    @app.exception_handler(ServerError)
    async def _server_error_handler(request: Request, exc: ServerError):
        log.error("ServerError request_id=%s: %s", _req_id(request), exc.message)
        return JSONResponse(status_code=500, content=_body(request, message=exc.message))

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        log.exception("Unhandled error request_id=%s", _req_id(request))
        return JSONResponse(status_code=500, content=_body(request, message="Internal server error"))
