"""
Aula Backend — Upload Hook
============================

What:  Sends one file to POST /api/upload and resolves to its public URL.
State:
    uploading:  True while the request is in flight
    error:      Message of the last failure, or None
No chunking, progress reporting or retry.
"""

import logging
import mimetypes
from typing import BinaryIO, Optional, Union

import httpx

from app.exceptions import NetworkError
from app.hooks.base import raise_for_envelope

logger = logging.getLogger(__name__)


class UploadHook:

    path = "/api/upload"

    def __init__(self, http: httpx.AsyncClient):
        self._http = http
        self.uploading = False
        self.error: Optional[str] = None

    async def upload_file(
        self,
        filename: str,
        content: Union[bytes, BinaryIO],
        content_type: Optional[str] = None,
    ) -> str:
        """
        Upload a file as multipart field `file`.

        Returns:
            Absolute public URL of the stored file

        Raises:
            NetworkError (also recorded in `error`)
        """
        content_type = content_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self.uploading = True
        self.error = None

        try:
            response = await self._http.post(
                self.path,
                files={"file": (filename, content, content_type)},
            )
            body = raise_for_envelope(response, "Failed to upload file")
            url = (body.get("data") or {}).get("url")
            if not url:
                raise NetworkError(message="Upload response did not include a URL")
            return url
        except NetworkError as e:
            self.error = e.message
            logger.error("Error uploading %s: %s", filename, e.message)
            raise
        except httpx.HTTPError as e:
            self.error = str(e) or "Failed to upload file"
            logger.error("Error uploading %s: %s", filename, str(e))
            raise NetworkError(message=self.error) from e
        finally:
            self.uploading = False
