"""
Aula Backend — Tarea Schemas
==============================

fecha_limite accepts ISO 8601 datetimes ("2025-03-01T23:59:00Z").
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TareaCreate(BaseModel):
    materia_id: uuid.UUID
    titulo: str
    descripcion: Optional[str] = None
    fecha_limite: Optional[datetime] = None
    archivo_url: Optional[str] = None

    model_config = {"extra": "ignore"}


class Tarea(TareaCreate):
    id: uuid.UUID
    creado_en: datetime

    model_config = {"from_attributes": True}
