"""
Aula Backend — Tarea (Task) Model
===================================

What:  ORM model for the `tareas` table.
Query Patterns:
    - Tasks of a subject: SELECT ... WHERE materia_id = :m ORDER BY fecha_limite ASC
      → Uses idx_tareas_materia_fecha (composite, covers filter + sort)
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Tarea(Base):
    __tablename__ = "tareas"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    materia_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("materias.id", ondelete="CASCADE"),
        nullable=False,
    )
    titulo: Mapped[str] = mapped_column(String(255), nullable=False)
    descripcion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Nullable: tasks without a deadline sort last
    fecha_limite: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    archivo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    creado_en: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_tareas_materia_fecha", materia_id, fecha_limite),
    )

    def __repr__(self) -> str:
        return f"<Tarea(id={self.id}, materia_id={self.materia_id}, titulo='{self.titulo}')>"
