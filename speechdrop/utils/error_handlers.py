from __future__ import annotations

from flask import Flask

from speechdrop.utils.errors import UNEXPECTED_ERROR_MESSAGE
from speechdrop.utils.json_helpers import jerror


# =========================
# Error Handlers
# =========================
def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def not_found(_):
        return jerror("Route not found", 404)

    @app.errorhandler(405)
    def method_not_allowed(_):
        return jerror("Method not allowed.", 405)

    @app.errorhandler(500)
    def internal(e):
        original = getattr(e, "original_exception", None)
        return jerror(UNEXPECTED_ERROR_MESSAGE, 500, str(original) if original else None)
