"""
Aula Backend — Result → HTTP Translation
==========================================

What:  The single place where a service outcome becomes a status code and a
       JSON envelope.
Who:   Route handlers (`render`) and the global exception handlers in
       main.py (`error_response`).

Status mapping:
    Ok                → success_status (200 list, 201 create/upload)
    ValidationError   → 400
    NotFoundError     → 404
    StoreError        → 500
    FileStorageError  → 500
    any other error   → 500

Security: 5xx responses never include `details`; the context is logged
server-side only.
"""

import logging
from typing import Dict, Type

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.exceptions import (
    AulaError,
    FileStorageError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from app.middleware.request_id import request_id_var
from app.results import Err, Result
from app.schemas.common import Envelope, ErrorEnvelope

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: Dict[Type[AulaError], int] = {
    ValidationError: 400,
    NotFoundError: 404,
    StoreError: 500,
    FileStorageError: 500,
}


def status_for(error: AulaError) -> int:
    for error_type, status in STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return status
    return 500


def error_response(error: AulaError) -> JSONResponse:
    """Log the failure at a level matching its status and build the error envelope."""
    rid = request_id_var.get("")
    status = status_for(error)

    if status >= 500:
        logger.error("[%s] %s: %s | Context: %s", rid, error.code, error.message, error.context)
        details = None
    else:
        logger.warning("[%s] %s: %s", rid, error.code, error.message)
        details = error.context or None

    body = ErrorEnvelope(
        error=error.message,
        code=error.code,
        details=details,
        request_id=rid or None,
    )
    return JSONResponse(status_code=status, content=jsonable_encoder(body))


def render(result: Result, success_status: int = 200) -> JSONResponse:
    """Translate a service Result into the canonical envelope."""
    if isinstance(result, Err):
        return error_response(result.error)
    body = Envelope(data=result.value)
    return JSONResponse(status_code=success_status, content=jsonable_encoder(body))
