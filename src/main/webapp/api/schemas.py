"""Transient request/response shapes for the upload endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class SchemaValidationError(ValueError):
    pass


@dataclass
class UploadRequest:
    """Fully buffered image taken from one multipart submission."""

    image_bytes: bytes
    filename: str
    declared_size: int


@dataclass
class RecognitionResult:
    text: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return not self.error


@dataclass
class PageData:
    """Values the home template may bind; the page currently uses none."""

    extracted_text: str = ""
    error: str = ""
    file_name: str = ""


def validate_upload_response(payload: dict[str, Any]) -> dict[str, Any]:
    if "error" in payload:
        if "text" in payload:
            raise SchemaValidationError("Error responses must not carry text.")
        if not isinstance(payload["error"], str):
            raise SchemaValidationError("Error message must be a string.")
        return payload

    missing = {"text", "filename"} - set(payload.keys())
    if missing:
        raise SchemaValidationError(f"Invalid upload response; missing keys: {sorted(missing)}")
    if not isinstance(payload["text"], str) or not isinstance(payload["filename"], str):
        raise SchemaValidationError("Upload response text and filename must be strings.")
    return payload
