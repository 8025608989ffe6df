"""Create materias, mensajes, noticias and tareas tables

Revision ID: 001
Revises: None
Create Date: 2025-03-01 00:00:00.000000+00:00

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "creado_en",
        sa.DateTime(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "materias",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("nombre", sa.String(255), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("portada_url", sa.Text(), nullable=True),
        sa.Column("profesor_id", sa.Uuid(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_materias_creado_en", "materias", [sa.text("creado_en DESC")])

    op.create_table(
        "mensajes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("remitente_id", sa.Uuid(), nullable=True),
        sa.Column("receptor_id", sa.Uuid(), nullable=True),
        sa.Column("contenido", sa.Text(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_mensajes_remitente_id", "mensajes", ["remitente_id"])
    op.create_index("idx_mensajes_receptor_id", "mensajes", ["receptor_id"])
    op.create_index("idx_mensajes_creado_en", "mensajes", [sa.text("creado_en DESC")])

    op.create_table(
        "noticias",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("contenido", sa.Text(), nullable=False),
        sa.Column("categoria", sa.String(100), nullable=True),
        sa.Column("portada_url", sa.Text(), nullable=True),
        sa.Column("autor_id", sa.Uuid(), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_noticias_categoria", "noticias", ["categoria"])
    op.create_index("idx_noticias_creado_en", "noticias", [sa.text("creado_en DESC")])

    op.create_table(
        "tareas",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("materia_id", sa.Uuid(), nullable=False),
        sa.Column("titulo", sa.String(255), nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("fecha_limite", sa.DateTime(timezone=True), nullable=True),
        sa.Column("archivo_url", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["materia_id"], ["materias.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tareas_materia_fecha", "tareas", ["materia_id", "fecha_limite"])


def downgrade() -> None:
    op.drop_index("idx_tareas_materia_fecha", table_name="tareas")
    op.drop_table("tareas")
    op.drop_index("idx_noticias_creado_en", table_name="noticias")
    op.drop_index("idx_noticias_categoria", table_name="noticias")
    op.drop_table("noticias")
    op.drop_index("idx_mensajes_creado_en", table_name="mensajes")
    op.drop_index("idx_mensajes_receptor_id", table_name="mensajes")
    op.drop_index("idx_mensajes_remitente_id", table_name="mensajes")
    op.drop_table("mensajes")
    op.drop_index("idx_materias_creado_en", table_name="materias")
    op.drop_table("materias")
