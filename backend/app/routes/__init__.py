# Routes package init
"""
Aula Backend — API Routes Package
===================================

Route Inventory:
    - materias.py:  GET/POST /api/materias
    - mensajes.py:  GET/POST /api/mensajes     (?usuario_id=)
    - noticias.py:  GET/POST /api/noticias     (?categoria=)
    - tareas.py:    GET/POST /api/tareas       (?materia_id=)
    - upload.py:    POST /api/upload, GET /api/files/{path}
    - health.py:    GET /health

Design Principle:
    Routes are THIN: pull query params / raw body off the request, call the
    service, hand the Result to `app.responses.render`. POST bodies are read
    raw (not as FastAPI body models) so a missing field is our 400
    "<field> is required", not FastAPI's 422.
"""

from typing import Any, Dict, Type

from pydantic import BaseModel


def json_body_doc(schema: Type[BaseModel]) -> Dict[str, Any]:
    """OpenAPI requestBody for routes that read the raw JSON body themselves."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }
