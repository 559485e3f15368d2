"""OCR invocation: engine port, session lifecycle and typed failures."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from src.main.webapp.services.recognition_profile import DEFAULT_PROFILE, RecognitionProfile

LOGGER = logging.getLogger(__name__)


class OcrError(Exception):
    """Any failure while driving the OCR engine."""

    kind = "OcrError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EngineInitFailure(OcrError):
    kind = "EngineInitFailure"


class ImageLoadFailure(OcrError):
    kind = "ImageLoadFailure"


class RecognitionFailure(OcrError):
    kind = "RecognitionFailure"


class EngineSession(ABC):
    """One configured engine instance, owned by a single recognition call."""

    def __init__(self, profile: RecognitionProfile):
        self.profile = profile
        # Private copy; mutations never reach the profile or other sessions.
        self.variables: dict[str, str] = dict(profile.variables)

    def set_variable(self, name: str, value: str) -> None:
        self.variables[name] = value

    @abstractmethod
    def load_image(self, image_bytes: bytes) -> None:
        """Hand raw image bytes to the engine."""

    @abstractmethod
    def extract_text(self) -> str:
        """Run recognition on the loaded image."""

    @abstractmethod
    def release(self) -> None:
        """Free engine resources. Must be safe to call after any failure."""

    def __enter__(self) -> "EngineSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.release()


class OcrEngine(ABC):
    @abstractmethod
    def configure(self, profile: RecognitionProfile) -> EngineSession:
        """Create a fresh session with ``profile`` applied."""

    def version(self) -> str:
        return "unknown"


class OcrService:
    """Runs the fixed recognition profile against in-memory image bytes."""

    def __init__(self, engine: OcrEngine, profile: RecognitionProfile = DEFAULT_PROFILE):
        self.engine = engine
        self.profile = profile

    def recognize(self, image_bytes: bytes) -> str:
        """Return trimmed text for ``image_bytes`` or raise an ``OcrError``.

        A new session is created for every call and released on every exit
        path. Failures are not retried.
        """
        with self.engine.configure(self.profile) as session:
            session.load_image(image_bytes)
            text = session.extract_text().strip()

        LOGGER.info("OCR completed: %d bytes in, %d characters out", len(image_bytes), len(text))
        return text
