"""Client hook for /api/mensajes, optionally scoped to one participant."""

from typing import Any, Dict, Optional

import httpx

from app.hooks.base import ResourceHook


class MensajesHook(ResourceHook):
    path = "/api/mensajes"
    label = "mensajes"
    scope_param = "usuario_id"

    def __init__(self, http: httpx.AsyncClient, usuario_id: Optional[Any] = None):
        super().__init__(http, scope=usuario_id)

    async def set_usuario(self, usuario_id: Optional[Any]) -> None:
        await self.set_scope(usuario_id)

    async def send_mensaje(self, mensaje: Dict[str, Any]) -> Dict[str, Any]:
        return await self.mutate(mensaje)
