"""
Aula Backend — Operation Results
==================================

What:  A small success/failure tagged union returned by every service call.
Why:   Routes never wrap services in try/except; they hand the result to
       `app.responses.render`, which is the only place that knows how a
       failure becomes an HTTP status code.

Usage:
    result = await tareas_service.list(store, filter_value=materia_id)
    if isinstance(result, Ok):
        rows = result.value
    else:
        logger.warning(result.error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from app.exceptions import AulaError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: AulaError


Result = Union[Ok[T], Err]
