"""Client hook for /api/materias."""

from typing import Any, Dict

import httpx

from app.hooks.base import ResourceHook


class MateriasHook(ResourceHook):
    path = "/api/materias"
    label = "materias"

    def __init__(self, http: httpx.AsyncClient):
        super().__init__(http)

    async def create_materia(self, materia: Dict[str, Any]) -> Dict[str, Any]:
        return await self.mutate(materia)
