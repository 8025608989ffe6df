"""
Aula Backend — Resource Hook Base
===================================

What:  The fetch/state-cache logic shared by every resource hook.

State machine (per hook instance):
    mount ──▶ loading ──▶ success (data replaced, error None)
                      └─▶ error   (error set, data untouched)
    Every refresh() / mutate() re-enters `loading`.

Sequencing:
    Each refresh() takes a generation number. Only the most recent refresh
    may write data / error or clear `loading`, so a slow response to an
    older request can never overwrite a newer one.

Error policy (same for every hook):
    refresh()  records the message in `error`, never raises
    mutate()   records the message in `error` AND raises NetworkError
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.exceptions import NetworkError

logger = logging.getLogger(__name__)


def decode_body(response: httpx.Response) -> Dict[str, Any]:
    """
    Decode a JSON envelope.

    Raises:
        NetworkError when the body is not a JSON object
    """
    try:
        body = response.json()
    except ValueError:
        raise NetworkError(
            message=f"Invalid response from server (HTTP {response.status_code})",
            status_code=response.status_code,
        )
    if not isinstance(body, dict):
        raise NetworkError(
            message=f"Unexpected response shape (HTTP {response.status_code})",
            status_code=response.status_code,
        )
    return body


def raise_for_envelope(response: httpx.Response, default_message: str) -> Dict[str, Any]:
    """Return the decoded body of a 2xx response, or raise with the server's `error`."""
    body = decode_body(response)
    if response.is_error:
        raise NetworkError(
            message=body.get("error") or default_message,
            status_code=response.status_code,
            context={"code": body.get("code"), "request_id": body.get("request_id")},
        )
    return body


class ResourceHook:
    """
    Base hook for one API resource.

    Subclasses set:
        path:         "/api/tareas"
        label:        "tareas" (used in default error messages)
        scope_param:  query parameter for the scoping value, or None

    Attributes:
        data:     Last successfully fetched rows (list of dicts)
        loading:  True from construction until the first refresh settles
        error:    Human-readable message of the last failure, or None
    """

    path: str = ""
    label: str = ""
    scope_param: Optional[str] = None

    def __init__(self, http: httpx.AsyncClient, scope: Any = None):
        self._http = http
        self._scope = scope
        self._generation = 0

        self.data: List[Dict[str, Any]] = []
        self.loading = True
        self.error: Optional[str] = None

    async def __aenter__(self) -> "ResourceHook":
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    @property
    def scope(self) -> Any:
        return self._scope

    def _params(self) -> Dict[str, str]:
        if self.scope_param and self._scope:
            return {self.scope_param: str(self._scope)}
        return {}

    async def mount(self) -> None:
        """Eager first fetch, like a component mounting."""
        await self.refresh()

    async def set_scope(self, scope: Any) -> None:
        """Change the scoping parameter; refetches only when it actually changed."""
        if scope == self._scope:
            return
        self._scope = scope
        await self.refresh()

    async def refresh(self) -> None:
        """
        Re-fetch the collection.

        After this settles (and no newer refresh started meanwhile), exactly
        one of {data replaced, error set} holds and `loading` is False.
        """
        self._generation += 1
        generation = self._generation

        self.loading = True
        self.error = None

        try:
            response = await self._http.get(self.path, params=self._params())
            body = raise_for_envelope(response, f"Failed to load {self.label}")
        except NetworkError as e:
            if generation == self._generation:
                self.error = e.message
            logger.error("Error refreshing %s: %s", self.label, e.message)
        except httpx.HTTPError as e:
            if generation == self._generation:
                self.error = str(e) or f"Failed to load {self.label}"
            logger.error("Error refreshing %s: %s", self.label, str(e))
        else:
            if generation == self._generation:
                self.data = body.get("data") or []
        finally:
            if generation == self._generation:
                self.loading = False

    async def mutate(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a new row, then refresh the whole collection.

        Returns:
            The created row as returned by the server.

        Raises:
            NetworkError (also recorded in `error`)
        """
        default_message = f"Failed to create {self.label}"
        try:
            response = await self._http.post(self.path, json=payload)
            body = raise_for_envelope(response, default_message)
        except NetworkError as e:
            self.error = e.message
            logger.error("Error creating %s: %s", self.label, e.message)
            raise
        except httpx.HTTPError as e:
            self.error = str(e) or default_message
            logger.error("Error creating %s: %s", self.label, str(e))
            raise NetworkError(message=self.error) from e

        await self.refresh()
        return body.get("data")
