from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, TypedDict


# =========================
# Wire shapes
# =========================
class SpeechRequestBody(TypedDict, total=False):
    text: str
    fileName: str


class SpeechResponse(TypedDict, total=False):
    success: bool
    audioUrl: str
    fileName: str
    textLength: int
    audioSize: int
    timestamp: str
    error: str
    details: str


# =========================
# Internal types
# =========================
@dataclass(frozen=True)
class SpeechRequest:
    text: str
    file_name: str


@dataclass(frozen=True)
class VoiceConfig:
    language_code: str = "en-US"
    name: str = "en-US-Neural2-J"
    ssml_gender: str = "MALE"
    audio_encoding: str = "MP3"
    speaking_rate: float = 0.95
    pitch: float = -2.0

    def to_payload(self, text: str) -> Dict[str, Any]:
        """Google `text:synthesize` request body for `text`."""
        return {
            "input": {"text": text},
            "voice": {
                "languageCode": self.language_code,
                "name": self.name,
                "ssmlGender": self.ssml_gender,
            },
            "audioConfig": {
                "audioEncoding": self.audio_encoding,
                "speakingRate": self.speaking_rate,
                "pitch": self.pitch,
            },
        }


@dataclass(frozen=True)
class StoredAudio:
    key: str
    public_url: str
    size: int
