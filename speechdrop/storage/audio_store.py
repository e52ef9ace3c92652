from __future__ import annotations

import requests

from speechdrop.config import AUDIO_CONTENT_TYPE, Settings, log
from speechdrop.schemas.tts import StoredAudio
from speechdrop.storage.supabase_store import (
    supabase_enabled,
    supabase_error_message,
    supabase_headers,
    supabase_object_url,
    supabase_post,
    supabase_public_url,
)
from speechdrop.utils.errors import Result, ServiceError


def upload_audio(settings: Settings, key: str, audio: bytes) -> Result[StoredAudio]:
    """Write `audio` to the bucket under `key`, replacing any existing object."""
    if not supabase_enabled(settings):
        log.error("SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY not set")
        return Result.failure(ServiceError("Storage service configuration error.", 500, "storage_config"))

    bucket = settings.storage_bucket
    headers = supabase_headers(settings, content_type=AUDIO_CONTENT_TYPE)
    headers["x-upsert"] = "true"
    try:
        resp = supabase_post(
            supabase_object_url(settings, bucket, key),
            headers=headers,
            data=audio,
            timeout=settings.supabase_timeout_secs,
        )
    except requests.RequestException as e:
        log.error("Storage upload error: %s", e)
        return Result.failure(ServiceError(f"File upload failed: {e}", 500, "upload_failed"))

    if resp.status_code >= 400:
        message = supabase_error_message(resp)
        log.error("Storage upload error (%s): %s", resp.status_code, message)
        return Result.failure(ServiceError(f"File upload failed: {message}", 500, "upload_failed"))

    return Result.success(
        StoredAudio(key=key, public_url=supabase_public_url(settings, bucket, key), size=len(audio))
    )
