"""
Aula Backend — Mensaje Schemas
================================
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class MensajeCreate(BaseModel):
    contenido: str
    remitente_id: Optional[uuid.UUID] = None
    receptor_id: Optional[uuid.UUID] = None

    model_config = {"extra": "ignore"}


class Mensaje(MensajeCreate):
    id: uuid.UUID
    creado_en: datetime

    model_config = {"from_attributes": True}
