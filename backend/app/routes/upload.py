"""
Aula Backend — Upload Route Handlers
======================================

What:  POST /api/upload stores a file and returns its public URL;
       GET /api/files/{path} serves it back.
Who:   Called by the UploadHook before a subject/news/task is created with
       the returned URL in portada_url / archivo_url.

Request Flow (upload):
    1. Client sends multipart/form-data with a 'file' field
    2. Content is read into memory (bounded by MAX_UPLOAD_SIZE validation)
    3. FileService validates extension and size, writes with aiofiles
    4. 201 {"success": true, "data": {"url": ...}}
"""

import logging

from fastapi import APIRouter, File, UploadFile
from fastapi.responses import FileResponse, JSONResponse

from app.responses import render
from app.results import Err
from app.schemas.common import Envelope, ErrorEnvelope, UploadResult
from app.services.file_service import file_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Uploads"])


@router.post(
    "/upload",
    status_code=201,
    response_model=Envelope[UploadResult],
    responses={
        400: {"description": "Missing file, unsupported type or too large", "model": ErrorEnvelope},
        500: {"description": "Storage error", "model": ErrorEnvelope},
    },
    summary="Upload a file",
)
async def upload_file(
    file: UploadFile = File(..., description="Image or document to store"),
) -> JSONResponse:
    try:
        content = await file.read()
        logger.info(
            "Received upload: filename=%s, size=%d bytes",
            file.filename or "unknown",
            len(content),
        )
        result = await file_service.save_upload(
            filename=file.filename or "",
            content=content,
            content_length=file.size,
        )
    finally:
        await file.close()

    return render(result, success_status=201)


@router.get(
    "/files/{file_path:path}",
    summary="Serve an uploaded file",
    responses={
        200: {"description": "File content"},
        400: {"description": "Invalid path", "model": ErrorEnvelope},
        404: {"description": "File not found", "model": ErrorEnvelope},
    },
)
async def serve_file(file_path: str):
    result = file_service.resolve(file_path)
    if isinstance(result, Err):
        return render(result)

    # Stored names are UUIDs, so content never changes under one path
    return FileResponse(
        path=str(result.value),
        headers={"Cache-Control": "public, max-age=86400"},
    )
