"""Application configuration for local and production environments."""

from __future__ import annotations

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


class BaseConfig:
    """Default configuration shared by all environments."""

    DEBUG = False
    TESTING = False

    JSON_SORT_KEYS = False
    JSON_AS_ASCII = False
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", 3 * 1024 * 1024))  # 3 MB

    ALLOWED_IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "bmp"})

    # 0 keeps the engine call unbounded.
    OCR_TIMEOUT_SECONDS = float(os.getenv("OCR_TIMEOUT_SECONDS", "0"))
    TESSERACT_CMD = os.getenv("TESSERACT_CMD", "")

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000",
        ).split(",")
        if origin.strip()
    ]

    PORT = int(os.getenv("PORT", "8080"))


class DevelopmentConfig(BaseConfig):
    """Developer-friendly configuration."""

    DEBUG = True


class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    OCR_TIMEOUT_SECONDS = 0.0


CONFIG_MAPPING = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": ProductionConfig,
}
