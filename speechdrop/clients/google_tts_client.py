from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

import requests

from speechdrop.config import GOOGLE_TTS_URL


@dataclass(frozen=True)
class SynthesisResponse:
    status_code: int
    body: Dict[str, Any]

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def error_message(self) -> str:
        err = self.body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        return "Unknown error"

    @property
    def audio_content(self) -> str:
        content = self.body.get("audioContent")
        return content if isinstance(content, str) else ""


class SynthesisTransportError(Exception):
    """Network failure talking to Google, with the API key scrubbed from the message."""


def redact(message: str, secret: str) -> str:
    if not secret:
        return message
    return message.replace(secret, "***")


# =========================
# Google Text-to-Speech (REST)
# =========================
def synthesize_speech(api_key: str, payload: Dict[str, Any], timeout: float) -> SynthesisResponse:
    """
    POST `payload` to `v1/text:synthesize` with the API key in the query string.
    Non-JSON bodies (proxy error pages etc.) come back as an empty dict so the
    caller only has to look at the status code and `audioContent`.
    """
    try:
        r = requests.post(
            GOOGLE_TTS_URL,
            params={"key": api_key},
            headers={"Content-Type": "application/json"},
            json=payload,
            timeout=timeout,
        )
    except requests.RequestException as e:
        # requests puts the full URL, key included, into connection errors.
        raise SynthesisTransportError(redact(str(e), api_key)) from None

    try:
        body = r.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}
    return SynthesisResponse(status_code=r.status_code, body=body)
