"""Upload gateway: pull one image out of a multipart form and shape the reply."""

from __future__ import annotations

import logging
from io import BytesIO
from typing import IO, AbstractSet, Any

from flask import Request
from werkzeug.exceptions import RequestEntityTooLarge

from src.main.webapp.api.schemas import RecognitionResult, UploadRequest, validate_upload_response
from src.main.webapp.utils.validators import is_valid_image_type

LOGGER = logging.getLogger(__name__)

IMAGE_FIELD = "image"
OCR_FAILURE_LABEL = "OCR failed"


class InMemoryUploadRequest(Request):
    """Keeps uploaded file parts in memory instead of spooling them to disk.

    ``MAX_CONTENT_LENGTH`` bounds the body, so the buffer is bounded too.
    """

    def _get_file_stream(
        self,
        total_content_length: int | None,
        content_type: str | None,
        filename: str | None = None,
        content_length: int | None = None,
    ) -> IO[bytes]:
        return BytesIO()


class GatewayError(Exception):
    status_code = 400
    message = "Bad request"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_payload(self) -> dict[str, str]:
        return {"error": self.message}


class FormTooLarge(GatewayError):
    message = "File too large or invalid form data"


class MissingFile(GatewayError):
    message = "No file uploaded or invalid file"


class UnsupportedType(GatewayError):
    message = "Please upload a valid image file (PNG, JPG, JPEG, GIF, BMP)"


class ReadFailure(GatewayError):
    status_code = 500
    message = "Failed to read uploaded file"


def accept_upload(
    request: Request,
    allowed_extensions: AbstractSet[str],
) -> UploadRequest:
    """Validate and buffer the ``image`` field of a multipart request.

    Raises a ``GatewayError`` subclass; the extension is checked before the
    file body is read.
    """
    try:
        files = request.files
    except (RequestEntityTooLarge, ValueError) as error:
        raise FormTooLarge() from error

    image_file = files.get(IMAGE_FIELD)
    if image_file is None or not image_file.filename:
        raise MissingFile()

    filename = image_file.filename
    if not is_valid_image_type(filename, allowed_extensions):
        LOGGER.info("Rejected upload with unsupported extension: %s", filename)
        raise UnsupportedType()

    try:
        image_bytes = image_file.read()
    except OSError as error:
        LOGGER.warning("Failed to buffer uploaded file %s: %s", filename, error)
        raise ReadFailure() from error

    return UploadRequest(
        image_bytes=image_bytes,
        filename=filename,
        declared_size=image_file.content_length or len(image_bytes),
    )


def render_result(result: RecognitionResult, filename: str) -> tuple[dict[str, Any], int]:
    """Build the JSON body and status code for a recognition outcome."""
    if not result.ok:
        payload = {"error": f"{OCR_FAILURE_LABEL}: {result.error}"}
        return validate_upload_response(payload), 500

    payload = {"text": result.text.strip(), "filename": filename}
    return validate_upload_response(payload), 200
