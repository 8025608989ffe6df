"""
Aula Backend — Materias Route Handlers
========================================

GET  /api/materias   all subjects, newest first
POST /api/materias   create a subject ({nombre} required)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from app.responses import render
from app.routes import json_body_doc
from app.schemas.common import Envelope, ErrorEnvelope
from app.schemas.materia import Materia, MateriaCreate
from app.services.resource_service import materias_service
from app.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Materias"])


@router.get(
    "/materias",
    response_model=Envelope[List[Materia]],
    responses={500: {"description": "Store error", "model": ErrorEnvelope}},
    summary="List subjects",
)
async def list_materias(store: Store = Depends(get_store)) -> JSONResponse:
    return render(await materias_service.list(store))


@router.post(
    "/materias",
    status_code=201,
    response_model=Envelope[Materia],
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorEnvelope},
        500: {"description": "Store error", "model": ErrorEnvelope},
    },
    summary="Create a subject",
    openapi_extra=json_body_doc(MateriaCreate),
)
async def create_materia(request: Request, store: Store = Depends(get_store)) -> JSONResponse:
    result = await materias_service.create_from_json(store, await request.body())
    return render(result, success_status=201)
