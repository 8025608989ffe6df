# Hooks package init
"""
Aula Backend — Client Hooks
=============================

What:  Client-side state holders that call the HTTP API and keep
       `data` / `loading` / `error` for a UI layer.
How:   Each hook wraps an injected `httpx.AsyncClient` (base_url pointing at
       the API). Tests point it at the app through `httpx.ASGITransport`.

Hook Inventory:
    - MateriasHook:  refresh(), create_materia()
    - MensajesHook:  refresh(), send_mensaje()     scope: usuario_id
    - NoticiasHook:  refresh(), create_noticia()   scope: categoria
    - TareasHook:    refresh(), create_tarea()     scope: materia_id
    - UploadHook:    upload_file()

Usage:
    async with httpx.AsyncClient(base_url="http://localhost:8000") as http:
        async with TareasHook(http, materia_id=materia_id) as tareas:
            print(tareas.data)
            await tareas.create_tarea({"materia_id": materia_id, "titulo": "Homework 1"})
"""

from app.hooks.base import ResourceHook
from app.hooks.materias import MateriasHook
from app.hooks.mensajes import MensajesHook
from app.hooks.noticias import NoticiasHook
from app.hooks.tareas import TareasHook
from app.hooks.upload import UploadHook

__all__ = [
    "ResourceHook",
    "MateriasHook",
    "MensajesHook",
    "NoticiasHook",
    "TareasHook",
    "UploadHook",
]
