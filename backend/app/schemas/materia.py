"""
Aula Backend — Materia Schemas
================================

MateriaCreate is the accepted POST body (unknown keys ignored);
Materia is the row returned by list and create.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class MateriaCreate(BaseModel):
    nombre: str
    descripcion: Optional[str] = None
    portada_url: Optional[str] = None
    profesor_id: Optional[uuid.UUID] = None

    model_config = {"extra": "ignore"}


class Materia(MateriaCreate):
    id: uuid.UUID
    creado_en: datetime

    model_config = {"from_attributes": True}
