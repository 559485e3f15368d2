from __future__ import annotations

import sys
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.main.webapp.app import create_app  # noqa: E402
from src.main.webapp.services.ocr_service import EngineSession, OcrEngine, OcrService  # noqa: E402


class FakeSession(EngineSession):
    def __init__(self, engine, profile):
        super().__init__(profile)
        self.engine = engine
        self.loaded: bytes | None = None
        self.release_calls = 0

    def load_image(self, image_bytes):
        if self.engine.load_error is not None:
            raise self.engine.load_error
        self.loaded = image_bytes

    def extract_text(self):
        if self.engine.extract_error is not None:
            raise self.engine.extract_error
        return self.engine.text

    def release(self):
        self.release_calls += 1


class FakeEngine(OcrEngine):
    def __init__(self, text="  Hello OCR  \n"):
        self.text = text
        self.load_error = None
        self.extract_error = None
        self.init_error = None
        self.sessions: list[FakeSession] = []

    def configure(self, profile):
        if self.init_error is not None:
            raise self.init_error
        session = FakeSession(self, profile)
        self.sessions.append(session)
        return session

    def version(self):
        return "5.3.0"


def make_png(size=(8, 8), color="white") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def app(fake_engine):
    return create_app("testing", ocr_service=OcrService(fake_engine))


@pytest.fixture
def client(app):
    return app.test_client()
