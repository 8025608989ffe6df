"""
Aula Backend — Noticias Route Handlers
========================================

GET  /api/noticias[?categoria=<name>]   newest first; "todas" means every category
POST /api/noticias                      publish ({titulo, contenido} required)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.responses import render
from app.routes import json_body_doc
from app.schemas.common import Envelope, ErrorEnvelope
from app.schemas.noticia import Noticia, NoticiaCreate
from app.services.resource_service import noticias_service
from app.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Noticias"])


@router.get(
    "/noticias",
    response_model=Envelope[List[Noticia]],
    responses={500: {"description": "Store error", "model": ErrorEnvelope}},
    summary="List news, optionally by category",
)
async def list_noticias(
    categoria: Optional[str] = Query(default=None, description="Exact category name"),
    store: Store = Depends(get_store),
) -> JSONResponse:
    return render(await noticias_service.list(store, filter_value=categoria))


@router.post(
    "/noticias",
    status_code=201,
    response_model=Envelope[Noticia],
    responses={
        400: {"description": "Missing or invalid fields", "model": ErrorEnvelope},
        500: {"description": "Store error", "model": ErrorEnvelope},
    },
    summary="Publish a news item",
    openapi_extra=json_body_doc(NoticiaCreate),
)
async def create_noticia(request: Request, store: Store = Depends(get_store)) -> JSONResponse:
    result = await noticias_service.create_from_json(store, await request.body())
    return render(result, success_status=201)
