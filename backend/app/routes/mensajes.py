"""
Aula Backend — Mensajes Route Handlers
========================================

GET  /api/mensajes[?usuario_id=<uuid>]
     Newest first. With usuario_id, only messages the user sent OR received.
POST /api/mensajes   send a message ({contenido} required)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.responses import render
from app.routes import json_body_doc
from app.schemas.common import Envelope, ErrorEnvelope
from app.schemas.mensaje import Mensaje, MensajeCreate
from app.services.resource_service import mensajes_service
from app.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Mensajes"])


@router.get(
    "/mensajes",
    response_model=Envelope[List[Mensaje]],
    responses={
        400: {"description": "usuario_id is not a UUID", "model": ErrorEnvelope},
        500: {"description": "Store error", "model": ErrorEnvelope},
    },
    summary="List messages, optionally for one participant",
)
async def list_mensajes(
    usuario_id: Optional[str] = Query(
        default=None,
        description="Participant id: matches remitente_id or receptor_id",
    ),
    store: Store = Depends(get_store),
) -> JSONResponse:
    return render(await mensajes_service.list(store, filter_value=usuario_id))


@router.post(
    "/mensajes",
    status_code=201,
    response_model=Envelope[Mensaje],
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorEnvelope},
        500: {"description": "Store error", "model": ErrorEnvelope},
    },
    summary="Send a message",
    openapi_extra=json_body_doc(MensajeCreate),
)
async def send_mensaje(request: Request, store: Store = Depends(get_store)) -> JSONResponse:
    result = await mensajes_service.create_from_json(store, await request.body())
    return render(result, success_status=201)
