"""Flask entrypoint for the OCR upload service."""

from __future__ import annotations

import logging
import os

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from src.main.webapp.api.gateway import FormTooLarge, InMemoryUploadRequest
from src.main.webapp.api.routes import api_bp
from src.main.webapp.config import CONFIG_MAPPING
from src.main.webapp.services.ocr_service import OcrService
from src.main.webapp.services.tesseract_engine import TesseractEngine


def create_app(config_name: str | None = None, ocr_service: OcrService | None = None) -> Flask:
    """Application factory for WSGI servers and tests."""
    env_name = config_name or os.getenv("FLASK_ENV", "default")
    config_class = CONFIG_MAPPING.get(env_name, CONFIG_MAPPING["default"])

    app = Flask(__name__)
    app.request_class = InMemoryUploadRequest
    app.config.from_object(config_class)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    CORS(
        app,
        resources={r"/*": {"origins": app.config["CORS_ORIGINS"]}},
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    if ocr_service is None:
        engine = TesseractEngine(
            tesseract_cmd=app.config["TESSERACT_CMD"],
            timeout=app.config["OCR_TIMEOUT_SECONDS"],
        )
        ocr_service = OcrService(engine)
    app.extensions["ocr_service"] = ocr_service

    app.register_blueprint(api_bp)

    register_error_handlers(app)
    return app


def register_error_handlers(app: Flask) -> None:
    """Turn runtime errors into JSON bodies."""

    @app.errorhandler(RequestEntityTooLarge)
    def payload_too_large(_: RequestEntityTooLarge):
        error = FormTooLarge()
        return jsonify(error.to_payload()), error.status_code

    @app.errorhandler(404)
    def not_found(_: Exception):
        return jsonify({"error": "Endpoint not found."}), 404

    @app.errorhandler(405)
    def method_not_allowed(_: Exception):
        return jsonify({"error": "Method not allowed."}), 405

    @app.errorhandler(Exception)
    def unhandled_error(error: Exception):
        if isinstance(error, HTTPException):
            return jsonify({"error": error.description}), error.code
        logging.getLogger(__name__).exception("Unhandled server error")
        return jsonify({"error": "Internal server error."}), 500


def main() -> None:
    app = create_app()
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=False, threaded=True)


if __name__ == "__main__":
    main()
