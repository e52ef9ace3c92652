from __future__ import annotations

from flask import Blueprint, current_app

from speechdrop.config import APP_NAME, APP_VERSION
from speechdrop.utils.json_helpers import jok

meta_bp = Blueprint("meta", __name__)


# =========================
# Meta / Health
# =========================
@meta_bp.get("/health")
def health():
    settings = current_app.config["SETTINGS"]
    return jok(
        {
            "name": APP_NAME,
            "version": APP_VERSION,
            "tts_configured": settings.tts_configured,
            "storage_configured": settings.storage_configured,
            "bucket": settings.storage_bucket,
        }
    )


@meta_bp.get("/version")
def version():
    return jok({"name": APP_NAME, "version": APP_VERSION})
