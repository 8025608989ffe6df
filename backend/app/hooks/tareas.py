"""Client hook for /api/tareas, optionally scoped to one subject."""

from typing import Any, Dict, Optional

import httpx

from app.hooks.base import ResourceHook


class TareasHook(ResourceHook):
    path = "/api/tareas"
    label = "tareas"
    scope_param = "materia_id"

    def __init__(self, http: httpx.AsyncClient, materia_id: Optional[Any] = None):
        super().__init__(http, scope=materia_id)

    async def set_materia(self, materia_id: Optional[Any]) -> None:
        await self.set_scope(materia_id)

    async def create_tarea(self, tarea: Dict[str, Any]) -> Dict[str, Any]:
        return await self.mutate(tarea)
