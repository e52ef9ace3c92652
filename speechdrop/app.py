from __future__ import annotations

import time
import uuid
from typing import Optional

from flask import Flask, g, request, got_request_exception
from flask_cors import CORS

from speechdrop.config import CORS_ALLOW_HEADERS, CORS_ALLOW_METHODS, CORS_MAX_AGE, Settings, load_settings
from speechdrop.utils.debug_events import install_event_log, record_event
from speechdrop.utils.error_handlers import register_error_handlers


def create_app(settings: Optional[Settings] = None) -> Flask:
    app = Flask(__name__)
    settings = settings or load_settings()
    app.config["SETTINGS"] = settings
    if settings.debug_console:
        install_event_log(app, settings.debug_events_max)
    CORS(
        app,
        origins="*",
        send_wildcard=True,
        methods=CORS_ALLOW_METHODS,
        allow_headers=CORS_ALLOW_HEADERS,
        max_age=CORS_MAX_AGE,
    )

    @app.before_request
    def _debug_request_start():
        rid = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        g.request_id = rid
        g.request_start_ts = time.time()
        record_event(
            "request",
            f"{request.method} {request.path} start",
            data={"method": request.method, "path": request.path},
            request_id=rid,
        )

    @app.after_request
    def _debug_request_end(response):
        rid = getattr(g, "request_id", None)
        start_ts = getattr(g, "request_start_ts", None)
        duration_ms = int((time.time() - start_ts) * 1000) if start_ts else None
        response.headers["X-Request-Id"] = rid or response.headers.get("X-Request-Id", "")
        record_event(
            "request",
            f"{request.method} {request.path} end",
            data={"status": response.status_code, "duration_ms": duration_ms},
            request_id=rid,
        )
        return response

    def _log_exception(sender, exception, **extra):
        record_event(
            "error",
            f"{type(exception).__name__}",
            data={"error": str(exception), "path": request.path},
            request_id=getattr(g, "request_id", None),
            level="error",
        )

    got_request_exception.connect(_log_exception, app)

    # Register blueprints
    from speechdrop.routes.tts import tts_bp
    from speechdrop.routes.meta import meta_bp
    from speechdrop.routes.debug import debug_bp

    app.register_blueprint(tts_bp)
    app.register_blueprint(meta_bp)
    app.register_blueprint(debug_bp)

    register_error_handlers(app)
    return app


app = create_app()
