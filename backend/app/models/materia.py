"""
Aula Backend — Materia (Subject) Model
========================================

What:  ORM model for the `materias` table.
Query Patterns:
    - List subjects: SELECT ... ORDER BY creado_en DESC
      → Uses idx_materias_creado_en
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Materia(Base):
    __tablename__ = "materias"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    descripcion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Public URL returned by POST /api/upload
    portada_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Owner (professor) id; no foreign key, users live in the auth provider
    profesor_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    creado_en: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_materias_creado_en", creado_en.desc()),
    )

    def __repr__(self) -> str:
        return f"<Materia(id={self.id}, nombre='{self.nombre}')>"
