# Models package init
"""
Aula Backend — ORM Models
===========================

Importing this package registers every table on `Base.metadata`, which is
what `SQLAlchemyStore` and Alembic read.

Table Inventory:
    - materias:  subjects (ordered by creado_en DESC)
    - mensajes:  messages between users (ordered by creado_en DESC)
    - noticias:  news items (ordered by creado_en DESC)
    - tareas:    tasks per subject (ordered by fecha_limite ASC)
"""

from app.models.materia import Materia
from app.models.mensaje import Mensaje
from app.models.noticia import Noticia
from app.models.tarea import Tarea

__all__ = ["Materia", "Mensaje", "Noticia", "Tarea"]
