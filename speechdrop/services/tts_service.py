from __future__ import annotations

import base64
import binascii
import re
from datetime import datetime, timezone
from typing import Any, Dict

from speechdrop.clients.google_tts_client import synthesize_speech
from speechdrop.config import AUDIO_SUFFIX, MAX_TEXT_LENGTH, Settings, log
from speechdrop.schemas.tts import SpeechRequest, SpeechResponse
from speechdrop.storage.audio_store import upload_audio
from speechdrop.utils.errors import Result, ServiceError, unexpected_error
from speechdrop.utils.observability import log_event

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def utf16_length(text: str) -> int:
    """Length in UTF-16 code units, the unit browsers and the 5000 limit use."""
    return len(text.encode("utf-16-le")) // 2


def validate_speech_request(data: Any) -> Result[SpeechRequest]:
    """
    Turn a decoded JSON body into a SpeechRequest. Checks run in order and the
    first failure wins. Anything that is not a JSON object has no fields.
    """
    if not isinstance(data, dict):
        data = {}
    text = data.get("text")
    file_name = data.get("fileName")

    if not text or not isinstance(text, str):
        return Result.failure(ServiceError("Text parameter is required and must be a string.", 400))
    if not file_name or not isinstance(file_name, str):
        return Result.failure(ServiceError("FileName parameter is required and must be a string.", 400))
    if utf16_length(text) > MAX_TEXT_LENGTH:
        return Result.failure(
            ServiceError(f"Text is too long. Maximum length is {MAX_TEXT_LENGTH} characters.", 400)
        )
    return Result.success(SpeechRequest(text=text, file_name=file_name))


def sanitize_file_name(file_name: str) -> str:
    # One "_" per UTF-16 code unit, so characters outside the BMP become "__".
    return _UNSAFE_KEY_CHARS.sub(lambda m: "_" * utf16_length(m.group()), file_name)


def storage_key(file_name: str) -> str:
    return f"{sanitize_file_name(file_name)}{AUDIO_SUFFIX}"


def synthesize(text: str, settings: Settings) -> Result[bytes]:
    if not settings.google_api_key:
        log.error("GOOGLE_CLOUD_API_KEY environment variable not set")
        return Result.failure(ServiceError("TTS service configuration error.", 500, "tts_config"))

    resp = synthesize_speech(
        settings.google_api_key,
        settings.voice.to_payload(text),
        timeout=settings.tts_timeout_secs,
    )
    if not resp.ok:
        log.error("Google TTS API error (%s): %s", resp.status_code, resp.body)
        return Result.failure(
            ServiceError(f"TTS generation failed: {resp.error_message}", resp.status_code, "tts_failed")
        )

    if not resp.audio_content:
        return Result.failure(ServiceError("No audio content received from TTS service.", 500, "no_audio"))

    try:
        content = resp.audio_content
        audio = base64.b64decode(content + "=" * (-len(content) % 4), validate=True)
    except (binascii.Error, ValueError) as e:
        return Result.failure(unexpected_error(f"Invalid audio content: {e}"))

    log.info("Audio generated successfully - Size: %d bytes", len(audio))
    return Result.success(audio)


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_and_store(req: SpeechRequest, settings: Settings) -> Result[SpeechResponse]:
    """Synthesize `req.text`, upload the MP3 and describe where it landed."""
    log.info("Processing TTS request - Text length: %d, File: %s", utf16_length(req.text), req.file_name)

    synth = synthesize(req.text, settings)
    if not synth.ok:
        log_event("tts", "synthesis failed", level="error", data=_error_data(synth.error))
        return Result.failure(synth.error)
    audio = synth.value
    log_event("tts", "synthesized", data={"audio_size": len(audio), "text_length": utf16_length(req.text)})

    stored = upload_audio(settings, storage_key(req.file_name), audio)
    if not stored.ok:
        log_event("tts", "upload failed", level="error", data=_error_data(stored.error))
        return Result.failure(stored.error)
    obj = stored.value
    log.info("File uploaded successfully: %s", obj.public_url)
    log_event("tts", "uploaded", data={"key": obj.key, "audio_size": obj.size})

    return Result.success(
        SpeechResponse(
            audioUrl=obj.public_url,
            fileName=obj.key,
            textLength=utf16_length(req.text),
            audioSize=obj.size,
            timestamp=_iso_now(),
        )
    )


def _error_data(err: ServiceError) -> Dict[str, Any]:
    return {"status": err.status, "code": err.code, "message": err.message}
