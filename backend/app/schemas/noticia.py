"""
Aula Backend — Noticia Schemas
================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class NoticiaCreate(BaseModel):
    titulo: str
    contenido: str
    categoria: Optional[str] = None
    portada_url: Optional[str] = None
    autor_id: Optional[uuid.UUID] = None

    model_config = {"extra": "ignore"}


class Noticia(NoticiaCreate):
    id: uuid.UUID
    creado_en: datetime

    model_config = {"from_attributes": True}
