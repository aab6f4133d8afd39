from __future__ import annotations

import json
import logging

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


def validation_error_response(e: ValidationError):
    # e.json() knows how to serialize error contexts that jsonify can't
    errors = json.loads(e.json(include_url=False))
    return jsonify({"message": "Validation error", "errors": errors}), 400


def register_error_handlers(app: Flask) -> None:

    @app.errorhandler(ValidationError)
    def _validation_error(e):
        return validation_error_response(e)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def _unhandled_error(e):
        logger.exception("Unhandled error")
        return jsonify({"message": "Internal server error"}), 500
