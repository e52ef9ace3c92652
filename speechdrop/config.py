from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from speechdrop.schemas.tts import VoiceConfig

# -------------------------------------------------------------------
# Paths
# -------------------------------------------------------------------
BASE_DIR = os.path.dirname(os.path.abspath(__file__))     # speechdrop/
ROOT_DIR = os.path.dirname(BASE_DIR)                      # project root

# =========================
# Config & Initialization
# =========================
# Load root .env first, then any CWD .env.
load_dotenv(os.path.join(ROOT_DIR, ".env"))
load_dotenv()

APP_NAME = os.getenv("APP_NAME", "SpeechDrop API")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
PORT = int(os.getenv("PORT", "5050"))
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")

GOOGLE_TTS_URL = "https://texttospeech.googleapis.com/v1/text:synthesize"
MAX_TEXT_LENGTH = 5000
AUDIO_SUFFIX = ".mp3"
AUDIO_CONTENT_TYPE = "audio/mpeg"

CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type", "x-requested-with"]
CORS_MAX_AGE = 86400

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
log = logging.getLogger("speechdrop")


@dataclass(frozen=True)
class Settings:
    """Process configuration handed to the app at startup.

    Secrets stay optional here: a missing one fails the request step that
    needs it with a 500, it never prevents the app from starting.
    """

    google_api_key: Optional[str] = None
    supabase_url: str = ""
    supabase_service_role_key: Optional[str] = None
    storage_bucket: str = "audio-files"
    voice: VoiceConfig = field(default_factory=VoiceConfig)
    tts_timeout_secs: float = 30.0
    supabase_timeout_secs: float = 10.0
    debug_console: bool = False
    debug_events_max: int = 500

    @property
    def tts_configured(self) -> bool:
        return bool(self.google_api_key)

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_service_role_key)


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        log.warning("Ignoring non-numeric %s=%r, using %s", name, raw, default)
        return default


def load_settings() -> Settings:
    voice = VoiceConfig(
        language_code=os.getenv("SPEECHDROP_TTS_LANGUAGE_CODE", "en-US"),
        name=os.getenv("SPEECHDROP_TTS_VOICE_NAME", "en-US-Neural2-J"),
        ssml_gender=os.getenv("SPEECHDROP_TTS_SSML_GENDER", "MALE"),
        speaking_rate=_env_float("SPEECHDROP_TTS_SPEAKING_RATE", 0.95),
        pitch=_env_float("SPEECHDROP_TTS_PITCH", -2.0),
    )
    return Settings(
        google_api_key=os.getenv("GOOGLE_CLOUD_API_KEY") or None,
        supabase_url=(os.getenv("SUPABASE_URL") or "").rstrip("/"),
        supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY") or None,
        storage_bucket=os.getenv("SPEECHDROP_STORAGE_BUCKET", "audio-files"),
        voice=voice,
        tts_timeout_secs=_env_float("SPEECHDROP_TTS_TIMEOUT_SECS", 30.0),
        supabase_timeout_secs=_env_float("SPEECHDROP_SUPABASE_TIMEOUT_SECS", 10.0),
        debug_console=os.getenv("SPEECHDROP_DEBUG_CONSOLE", "false").lower() in ("1", "true", "yes"),
        debug_events_max=int(_env_float("SPEECHDROP_DEBUG_EVENTS_MAX", 500)),
    )
