"""
Aula Backend — Shared Response Schemas
========================================

What:  The one envelope every endpoint answers with, plus the health and
       upload payloads.

Envelope:
    success → {"success": true,  "data": <row | [rows] | upload>}
    failure → {"success": false, "error": "<human message>", "code": "...",
               "details": {...}, "request_id": "..."}
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class Envelope(BaseModel, Generic[DataT]):
    """Successful response wrapper."""
    success: bool = Field(default=True)
    data: DataT


class ErrorEnvelope(BaseModel):
    """
    Failed response wrapper.

    `error` is safe to show to end users; hooks surface it verbatim.
    `details` is only populated for client errors (400/404).
    """
    success: bool = Field(default=False)
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error code")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class UploadResult(BaseModel):
    url: str = Field(description="Absolute public URL of the stored file")
    path: str = Field(description="Path relative to the storage root")
    size: int = Field(description="Stored size in bytes")
    content_type: str = Field(description="Content type guessed from the extension")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
