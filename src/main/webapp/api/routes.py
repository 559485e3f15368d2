"""Routes for the OCR page, image upload and readiness."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from flask import Blueprint, current_app, jsonify, redirect, render_template, request, url_for
from jinja2 import TemplateError

from src.main.webapp.api.gateway import GatewayError, accept_upload, render_result
from src.main.webapp.api.schemas import PageData, RecognitionResult
from src.main.webapp.services.ocr_service import OcrError

LOGGER = logging.getLogger(__name__)
api_bp = Blueprint("api", __name__)

# OPTIONS stays automatic so CORS preflight keeps working.
_UPLOAD_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "TRACE", "CONNECT"]


@api_bp.route("/", methods=["GET"])
def home_page() -> Any:
    try:
        return render_template("index.html", page=asdict(PageData()))
    except TemplateError as error:
        LOGGER.exception("Home page rendering failed")
        return str(error), 500, {"Content-Type": "text/plain; charset=utf-8"}


@api_bp.route("/ready", methods=["GET"])
def readiness() -> Any:
    ocr_service = current_app.extensions["ocr_service"]
    try:
        version = ocr_service.engine.version()
    except OSError as error:
        return jsonify({"status": "degraded", "error": str(error)}), 503
    return jsonify({"status": "ready", "tesseract_version": version}), 200


@api_bp.route("/upload", methods=_UPLOAD_METHODS)
def upload() -> Any:
    """Extract text from one uploaded image and return it as JSON."""
    if request.method != "POST":
        return redirect(url_for("api.home_page"), code=303)

    try:
        upload_request = accept_upload(
            request,
            allowed_extensions=current_app.config["ALLOWED_IMAGE_EXTENSIONS"],
        )
    except GatewayError as error:
        return jsonify(error.to_payload()), error.status_code

    ocr_service = current_app.extensions["ocr_service"]
    try:
        text = ocr_service.recognize(upload_request.image_bytes)
        result = RecognitionResult(text=text)
    except OcrError as error:
        LOGGER.warning("%s for %s: %s", error.kind, upload_request.filename, error.message)
        result = RecognitionResult(error=error.message)

    try:
        payload, status = render_result(result, upload_request.filename)
        return jsonify(payload), status
    except (TypeError, ValueError):
        LOGGER.exception("Failed to encode upload response")
        return jsonify({"error": "Failed to encode response"}), 500
