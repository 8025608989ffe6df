"""
Aula Backend — Tareas Route Handlers
======================================

GET  /api/tareas[?materia_id=<uuid>]   earliest deadline first
POST /api/tareas                       create ({materia_id, titulo} required)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.responses import render
from app.routes import json_body_doc
from app.schemas.common import Envelope, ErrorEnvelope
from app.schemas.tarea import Tarea, TareaCreate
from app.services.resource_service import tareas_service
from app.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Tareas"])


@router.get(
    "/tareas",
    response_model=Envelope[List[Tarea]],
    responses={
        400: {"description": "materia_id is not a UUID", "model": ErrorEnvelope},
        500: {"description": "Store error", "model": ErrorEnvelope},
    },
    summary="List tasks, optionally for one subject",
)
async def list_tareas(
    materia_id: Optional[str] = Query(default=None, description="Subject id"),
    store: Store = Depends(get_store),
) -> JSONResponse:
    return render(await tareas_service.list(store, filter_value=materia_id))


@router.post(
    "/tareas",
    status_code=201,
    response_model=Envelope[Tarea],
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorEnvelope},
        500: {"description": "Store error", "model": ErrorEnvelope},
    },
    summary="Create a task",
    openapi_extra=json_body_doc(TareaCreate),
)
async def create_tarea(request: Request, store: Store = Depends(get_store)) -> JSONResponse:
    result = await tareas_service.create_from_json(store, await request.body())
    return render(result, success_status=201)
