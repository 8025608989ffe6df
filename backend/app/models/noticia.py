"""
Aula Backend — Noticia (News) Model
=====================================

What:  ORM model for the `noticias` table.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Noticia(Base):
    __tablename__ = "noticias"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    titulo: Mapped[str] = mapped_column(String(255), nullable=False)
    contenido: Mapped[str] = mapped_column(Text, nullable=False)

    # Free-form tag such as "deportes" or "academico"
    categoria: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    portada_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    autor_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)

    creado_en: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_noticias_categoria", categoria),
        Index("idx_noticias_creado_en", creado_en.desc()),
    )

    def __repr__(self) -> str:
        return f"<Noticia(id={self.id}, categoria='{self.categoria}')>"
