"""
HTTP extraction endpoint.

Accepts ``{"messages": [{"role": "user", "content": "..."}]}`` and answers
with the raw extraction fields ``start_time``, ``end_time``, ``country`` and
``city``. The model API key stays on this server.
"""

import logging
import os
from http import HTTPStatus

import requests
from flask import Blueprint, Flask, current_app, jsonify, request

from .config import Settings, get_settings
from .errors import ExtractionError
from .extractors.remote import RemoteExtractor

API_BLUEPRINT = Blueprint("extract", __name__, url_prefix="/api")

_LOG_LEVELS = {"INFO": logging.INFO, "WARN": logging.WARNING, "ERROR": logging.ERROR}


def validate_messages(body, max_chars):
    """
    Return the last message's content, or an error string.

    Mirrors the rules the chat gateway enforces before calling out.
    """
    if not isinstance(body, dict):
        return None, "Invalid messages format"
    messages = body.get("messages")
    if not messages or not isinstance(messages, list):
        return None, "Invalid messages format"
    last = messages[-1]
    content = last.get("content") if isinstance(last, dict) else None
    if not isinstance(content, str) or not content.strip() or len(content) > max_chars:
        return None, "Invalid input length"
    return content, None


@API_BLUEPRINT.route("/extract", methods=["POST"])
def extract():
    """Extract time and place from the last user message."""
    settings: Settings = current_app.config["NAVIGATOR_SETTINGS"]
    content, error = validate_messages(request.get_json(silent=True), settings.max_utterance_chars)
    if error:
        return jsonify({"error": error}), HTTPStatus.BAD_REQUEST

    extractor = RemoteExtractor(settings)
    logger = current_app.logger
    extractor.set_logger(lambda level, message: logger.log(_LOG_LEVELS.get(level, logging.INFO), message))
    try:
        fields = extractor.request_fields(content)
    except ExtractionError as e:
        current_app.logger.error(f"Response format error: {e}")
        return jsonify({"error": "Invalid response format"}), HTTPStatus.INTERNAL_SERVER_ERROR
    except requests.RequestException as e:
        current_app.logger.error(f"Extraction request failed: {e}")
        return jsonify({"error": "Extraction request failed"}), HTTPStatus.INTERNAL_SERVER_ERROR

    return jsonify(fields), HTTPStatus.OK


def create_app(settings=None):
    """Create flask app."""
    app = Flask(__name__)
    app.config["NAVIGATOR_SETTINGS"] = settings or get_settings()
    app.register_blueprint(API_BLUEPRINT)

    @app.errorhandler(HTTPStatus.METHOD_NOT_ALLOWED)
    def method_not_allowed(_error):
        return jsonify({"error": "Method not allowed"}), HTTPStatus.METHOD_NOT_ALLOWED

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok"}), HTTPStatus.OK

    return app


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    port = int(os.environ.get("PORT", 8081))
    create_app().run(host="0.0.0.0", port=port, use_reloader=False)
