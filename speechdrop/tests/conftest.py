from typing import Any, Dict, List, Optional

import pytest
import requests

from speechdrop.app import create_app
from speechdrop.config import Settings

SUPABASE_URL = "https://proj.supabase.co"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: str = ""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeNetwork:
    """Stands in for requests.post; answers Google TTS and Supabase Storage calls."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.tts_response = FakeResponse(200, {"audioContent": "AAAA"})
        self.storage_response = FakeResponse(200, {"Key": "audio-files/x.mp3"})
        self.objects: Dict[str, bytes] = {}
        self.raise_on_tts: Optional[Exception] = None

    def post(self, url, params=None, headers=None, json=None, data=None, timeout=None, **kwargs):
        call = {"url": url, "params": params, "headers": headers or {}, "json": json, "data": data, "timeout": timeout}
        self.calls.append(call)
        if "texttospeech.googleapis.com" in url:
            if self.raise_on_tts:
                raise self.raise_on_tts
            return self.tts_response
        if "/storage/v1/object/" in url:
            if self.storage_response.status_code < 400:
                self.objects[url] = data
            return self.storage_response
        raise AssertionError(f"unexpected POST {url}")

    def set_tts(self, status_code: int, body: Any = None, text: str = "") -> None:
        self.tts_response = FakeResponse(status_code, body, text)

    def set_storage(self, status_code: int, body: Any = None, text: str = "") -> None:
        self.storage_response = FakeResponse(status_code, body, text)

    def calls_to(self, needle: str) -> List[Dict[str, Any]]:
        return [c for c in self.calls if needle in c["url"]]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_api_key="g-key-123",
        supabase_url=SUPABASE_URL,
        supabase_service_role_key="service-role-xyz",
    )


@pytest.fixture
def fake_network(monkeypatch) -> FakeNetwork:
    net = FakeNetwork()
    monkeypatch.setattr(requests, "post", net.post)
    return net


@pytest.fixture
def app(settings):
    app = create_app(settings)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
