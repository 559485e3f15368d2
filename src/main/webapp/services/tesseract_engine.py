"""Tesseract binding for the OCR engine port (pytesseract + Pillow)."""

from __future__ import annotations

import logging
from io import BytesIO

import pytesseract
from PIL import Image, UnidentifiedImageError

from src.main.webapp.services.ocr_service import (
    EngineInitFailure,
    EngineSession,
    ImageLoadFailure,
    OcrEngine,
    RecognitionFailure,
)
from src.main.webapp.services.recognition_profile import RecognitionProfile

LOGGER = logging.getLogger(__name__)


class TesseractSession(EngineSession):
    """Holds one decoded image and the session's private tuning variables."""

    def __init__(self, profile: RecognitionProfile, timeout: float = 0):
        super().__init__(profile)
        self.timeout = timeout
        self._image: Image.Image | None = None

    def load_image(self, image_bytes: bytes) -> None:
        self.release()
        try:
            image = Image.open(BytesIO(image_bytes))
        except UnidentifiedImageError as error:
            # Pillow's message embeds the repr of the buffer object.
            raise ImageLoadFailure("failed to set image: cannot identify image file") from error
        except (OSError, ValueError, Image.DecompressionBombError) as error:
            raise ImageLoadFailure(f"failed to set image: {error}") from error

        try:
            image.load()
        except (OSError, ValueError, Image.DecompressionBombError) as error:
            image.close()
            raise ImageLoadFailure(f"failed to set image: {error}") from error
        self._image = image

    def extract_text(self) -> str:
        if self._image is None:
            raise RecognitionFailure("failed to extract text: no image loaded")

        try:
            return pytesseract.image_to_string(
                self._image,
                lang=self.profile.language,
                config=self.profile.to_tesseract_config(self.variables),
                timeout=self.timeout,
            )
        except pytesseract.TesseractNotFoundError as error:
            raise EngineInitFailure(f"failed to initialize engine: {error}") from error
        except pytesseract.TesseractError as error:
            raise RecognitionFailure(f"failed to extract text: {error.message}") from error
        except RuntimeError as error:
            # pytesseract signals an expired timeout with a bare RuntimeError.
            raise RecognitionFailure(f"failed to extract text: {error}") from error

    def release(self) -> None:
        if self._image is not None:
            self._image.close()
            self._image = None


class TesseractEngine(OcrEngine):
    def __init__(self, tesseract_cmd: str = "", timeout: float = 0):
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        self.timeout = timeout

    def configure(self, profile: RecognitionProfile) -> TesseractSession:
        try:
            pytesseract.get_tesseract_version()
        except OSError as error:
            LOGGER.error("Tesseract binary unavailable: %s", error)
            raise EngineInitFailure(f"failed to initialize engine: {error}") from error
        return TesseractSession(profile, timeout=self.timeout)

    def version(self) -> str:
        return str(pytesseract.get_tesseract_version())
