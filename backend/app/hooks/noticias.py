"""Client hook for /api/noticias, optionally scoped to one category."""

from typing import Any, Dict, Optional

import httpx

from app.hooks.base import ResourceHook


class NoticiasHook(ResourceHook):
    path = "/api/noticias"
    label = "noticias"
    scope_param = "categoria"

    def __init__(self, http: httpx.AsyncClient, categoria: Optional[str] = None):
        super().__init__(http, scope=categoria)

    async def set_categoria(self, categoria: Optional[str]) -> None:
        await self.set_scope(categoria)

    async def create_noticia(self, noticia: Dict[str, Any]) -> Dict[str, Any]:
        return await self.mutate(noticia)
