"""Media error taxonomy.

Service code raises these without knowing about HTTP; ``main.py`` registers a
single exception handler that renders them as ``{error, details}`` JSON with
the carried status code.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class MediaError(Exception):
    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(self, details: Optional[str] = None):
        super().__init__(details or self.error)
        self.details = details

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"error": self.error}
        if self.details:
            payload["details"] = self.details
        return payload


class UnsupportedMediaType(MediaError):
    """Declared content type is not on the allow-list."""

    status_code = 415
    error = "Invalid file type. Allowed types: JPEG, PNG, MP4, AVI, MOV, MPEG."


class MissingPayload(MediaError):
    status_code = 400
    error = "No file uploaded"


class MissingName(MediaError):
    status_code = 400
    error = "Filename is required"


class InvalidName(MediaError):
    """Name would resolve outside the content directory."""

    status_code = 400
    error = "Invalid filename"


class NotFound(MediaError):
    status_code = 404
    error = "File not found"


class StorageDeleteFailure(NotFound):
    """File exists (or may exist) but could not be removed."""


class StorageWriteFailure(MediaError):
    pass


class MetadataFailure(MediaError):
    pass
