"""
Aula Backend — Mensaje (Message) Model
========================================

What:  ORM model for the `mensajes` table.
Query Patterns:
    - Conversation of one user:
      SELECT ... WHERE remitente_id = :u OR receptor_id = :u ORDER BY creado_en DESC
      → Uses the two participant indexes (BitmapOr in Postgres)
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Mensaje(Base):
    __tablename__ = "mensajes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    remitente_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    receptor_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True)
    contenido: Mapped[str] = mapped_column(Text, nullable=False)

    creado_en: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    __table_args__ = (
        Index("idx_mensajes_remitente_id", remitente_id),
        Index("idx_mensajes_receptor_id", receptor_id),
        Index("idx_mensajes_creado_en", creado_en.desc()),
    )

    def __repr__(self) -> str:
        return f"<Mensaje(id={self.id}, remitente_id={self.remitente_id})>"
