from __future__ import annotations

from flask import Blueprint, current_app, request

from speechdrop.config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_MAX_AGE, Settings, log
from speechdrop.services.tts_service import generate_and_store, validate_speech_request
from speechdrop.utils.errors import UNEXPECTED_ERROR_MESSAGE
from speechdrop.utils.json_helpers import jerror, jok, jservice_error
from speechdrop.utils.observability import log_event

tts_bp = Blueprint("tts", __name__)

METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed. Only POST requests are accepted."

# Every method is routed here so that non-POST requests get the JSON 405 body.
_ROUTED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# Sent on every OPTIONS, not only on preflights that carry Access-Control-Request-*.
# Allow-Origin is set too, so flask-cors leaves these headers alone.
PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    "Access-Control-Max-Age": str(CORS_MAX_AGE),
}


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


# =========================
# Text-to-Speech -> Storage
# =========================
@tts_bp.route("/", methods=_ROUTED_METHODS)
@tts_bp.route("/tts", methods=_ROUTED_METHODS)
def tts():
    """
    Body: { text: str, fileName: str }
    Synthesizes `text`, uploads the MP3 as `<fileName>.mp3` and returns its public URL.
    flask-cors adds Allow-Origin to every other response (see create_app).
    """
    if request.method == "OPTIONS":
        return "", 204, PREFLIGHT_HEADERS

    if request.method != "POST":
        return jerror(METHOD_NOT_ALLOWED_MESSAGE, 405)

    try:
        data = request.get_json(force=True, silent=True)
        if data is None:
            return jerror("Invalid JSON in request body.", 400)

        parsed = validate_speech_request(data)
        if not parsed.ok:
            return jservice_error(parsed.error)

        out = generate_and_store(parsed.value, _settings())
        if not out.ok:
            return jservice_error(out.error)
        return jok(out.value)
    except Exception as e:
        log.exception("Unexpected error")
        log_event("error", type(e).__name__, level="error", data={"error": str(e)})
        return jerror(UNEXPECTED_ERROR_MESSAGE, 500, str(e))
