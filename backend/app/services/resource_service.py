"""
Aula Backend — Resource Service (list / create over the store)
================================================================

What:  The validate → query → map logic shared by materias, mensajes,
       noticias and tareas.
Why:   The four resources differ only in table, fields, sort order and
       filter column(s). One `ResourceService` parameterized by a
       `ResourceDefinition` keeps their behavior identical.
How:   Every public method returns a `Result` (Ok / Err) instead of raising;
       routes pass it straight to `app.responses.render`.
Who:   Called by the route handlers in app/routes/.

Flow (POST /api/tareas):
    raw body ──▶ JSON object? ──▶ required fields present? ──▶ types valid?
                     │ no                │ no                      │ no
                     ▼                   ▼                         ▼
                   Err(400)            Err(400)                  Err(400)
                                                 yes ──▶ store.insert ──▶ Ok(row) | Err(500)

    The store is never touched unless validation passed.
"""

import json
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.exceptions import MissingFieldsError, StoreError, ValidationError
from app.results import Err, Ok, Result
from app.schemas.materia import Materia, MateriaCreate
from app.schemas.mensaje import Mensaje, MensajeCreate
from app.schemas.noticia import Noticia, NoticiaCreate
from app.schemas.tarea import Tarea, TareaCreate
from app.store import AnyOf, Eq, Query, Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceDefinition:
    """
    Static description of one resource.

    Attributes:
        table:           Store table name (also used in messages)
        create_schema:   Accepted POST body; its required fields are the
                         ones rejected with "<field> is required"
        row_schema:      Shape of a stored row
        order_by:        Fixed sort column
        ascending:       Fixed sort direction
        filter_param:    Query parameter name carrying the filter value
        filter_columns:  Columns matched by the list filter. One column is an
                         equality filter; several are OR-combined.
        filter_type:     Type the raw query string is converted to
        filter_default:  Filter value that means "everything" (e.g. "todas")
    """
    table: str
    create_schema: Type[BaseModel]
    row_schema: Type[BaseModel]
    order_by: str
    ascending: bool = False
    filter_param: Optional[str] = None
    filter_columns: Tuple[str, ...] = ()
    filter_type: type = str
    filter_default: Optional[str] = None

    @property
    def required_fields(self) -> List[str]:
        return [
            name for name, info in self.create_schema.model_fields.items()
            if info.is_required()
        ]


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class ResourceService:
    """
    Stateless list/create operations for a single resource.

    The store is passed in on every call so a request-scoped
    `SQLAlchemyStore` (or a test fake) can be injected.
    """

    def __init__(self, definition: ResourceDefinition):
        self.definition = definition

    # ── Query building ────────────────────────────────────────────────────

    def _normalize_filter(self, value: Any) -> Any:
        d = self.definition
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if d.filter_default is not None and value.lower() == d.filter_default.lower():
                return None
        if isinstance(value, d.filter_type):
            return value
        try:
            return d.filter_type(value)
        except (AttributeError, TypeError, ValueError):
            raise ValidationError(
                message=f"{d.filter_param} must be a valid {d.filter_type.__name__}",
                field=d.filter_param,
            )

    def build_query(self, filter_value: Any = None) -> Query:
        """
        Build the select for a list request.

        Absent, blank or default filter values select the whole table.

        Raises:
            ValidationError when the value cannot be converted to filter_type
        """
        d = self.definition
        query = Query(table=d.table, order_by=d.order_by, ascending=d.ascending)

        value = self._normalize_filter(filter_value)
        if value is None or not d.filter_columns:
            return query

        if len(d.filter_columns) == 1:
            return query.where(Eq(d.filter_columns[0], value))
        return query.where(AnyOf(tuple(Eq(column, value) for column in d.filter_columns)))

    # ── Operations ────────────────────────────────────────────────────────

    async def list(self, store: Store, filter_value: Any = None) -> Result:
        """
        Select all rows in the fixed order, optionally filtered.

        Returns:
            Ok(List[row_schema]) or Err(ValidationError | StoreError)
        """
        try:
            query = self.build_query(filter_value)
            rows = await store.select(query)
        except (ValidationError, StoreError) as e:
            return Err(e)

        items = self._to_rows(rows)
        if isinstance(items, Err):
            return items
        logger.debug("Listed %d %s (filters=%s)", len(items.value), self.definition.table, query.filters)
        return items

    def validate(self, payload: Any) -> Result:
        """
        Check a decoded POST body against the create schema.

        Order of checks:
            1. Body is a JSON object
            2. Every required field is present and not blank
            3. Known fields have valid types (unknown keys are dropped)
        """
        if not isinstance(payload, dict):
            return Err(ValidationError(message="Request body must be a JSON object"))

        missing = [name for name in self.definition.required_fields if _is_blank(payload.get(name))]
        if missing:
            return Err(MissingFieldsError(missing))

        try:
            return Ok(self.definition.create_schema.model_validate(payload))
        except PydanticValidationError as e:
            errors = e.errors()
            fields = [".".join(str(part) for part in err["loc"]) for err in errors]
            first = errors[0]
            return Err(ValidationError(
                message=f"{fields[0]}: {first['msg']}",
                field=fields[0],
                context={"fields": fields},
            ))

    async def create(self, store: Store, payload: Any) -> Result:
        """
        Validate and insert one row, returning the stored row.

        Returns:
            Ok(row_schema) or Err(ValidationError | StoreError)
        """
        validated = self.validate(payload)
        if isinstance(validated, Err):
            return validated

        row = validated.value.model_dump()
        try:
            stored = await store.insert(self.definition.table, row)
        except StoreError as e:
            return Err(e)

        result = self._to_row(stored)
        if isinstance(result, Ok):
            logger.info("Created %s row %s", self.definition.table, result.value.id)
        return result

    async def create_from_json(self, store: Store, raw_body: bytes) -> Result:
        """Decode a raw request body, then `create`. Malformed JSON is a 400."""
        try:
            payload = json.loads(raw_body) if raw_body else None
        except (ValueError, UnicodeDecodeError):
            return Err(ValidationError(message="Request body must be valid JSON"))
        return await self.create(store, payload)

    # ── Row mapping ───────────────────────────────────────────────────────

    def _to_row(self, row: Dict[str, Any]) -> Result:
        try:
            return Ok(self.definition.row_schema.model_validate(row))
        except PydanticValidationError as e:
            logger.error("Unexpected %s row shape: %s", self.definition.table, str(e))
            return Err(StoreError(
                message=f"Error reading {self.definition.table}",
                context={"table": self.definition.table},
            ))

    def _to_rows(self, rows: List[Dict[str, Any]]) -> Result:
        items = []
        for row in rows:
            mapped = self._to_row(row)
            if isinstance(mapped, Err):
                return mapped
            items.append(mapped.value)
        return Ok(items)


# ══════════════════════════════════════════════════════════════════════════
# Resource definitions
# ══════════════════════════════════════════════════════════════════════════

MATERIAS = ResourceDefinition(
    table="materias",
    create_schema=MateriaCreate,
    row_schema=Materia,
    order_by="creado_en",
    ascending=False,
)

MENSAJES = ResourceDefinition(
    table="mensajes",
    create_schema=MensajeCreate,
    row_schema=Mensaje,
    order_by="creado_en",
    ascending=False,
    filter_param="usuario_id",
    filter_columns=("remitente_id", "receptor_id"),
    filter_type=uuid.UUID,
)

NOTICIAS = ResourceDefinition(
    table="noticias",
    create_schema=NoticiaCreate,
    row_schema=Noticia,
    order_by="creado_en",
    ascending=False,
    filter_param="categoria",
    filter_columns=("categoria",),
    filter_default="todas",
)

TAREAS = ResourceDefinition(
    table="tareas",
    create_schema=TareaCreate,
    row_schema=Tarea,
    order_by="fecha_limite",
    ascending=True,
    filter_param="materia_id",
    filter_columns=("materia_id",),
    filter_type=uuid.UUID,
)

materias_service = ResourceService(MATERIAS)
mensajes_service = ResourceService(MENSAJES)
noticias_service = ResourceService(NOTICIAS)
tareas_service = ResourceService(TAREAS)
