from speechdrop.app import create_app
from speechdrop.config import Settings
from speechdrop.utils.debug_events import DebugEventLog


def test_health_reports_configuration_without_secrets(client):
    resp = client.get("/health")
    body = resp.get_json()
    raw = resp.get_data(as_text=True)

    assert resp.status_code == 200
    assert body["success"] is True
    assert body["tts_configured"] is True
    assert body["storage_configured"] is True
    assert body["bucket"] == "audio-files"
    assert "g-key-123" not in raw and "service-role-xyz" not in raw, "secrets must never be echoed"


def test_health_flags_missing_configuration():
    client = create_app(Settings()).test_client()
    body = client.get("/health").get_json()
    assert body["tts_configured"] is False
    assert body["storage_configured"] is False


def test_version(client):
    body = client.get("/version").get_json()
    assert body["success"] is True
    assert body["name"] and body["version"]


def test_wrong_method_on_meta_route_is_json_405(client):
    resp = client.post("/health")
    assert resp.status_code == 405
    assert resp.get_json() == {"success": False, "error": "Method not allowed."}


def _debug_client(settings):
    app = create_app(
        Settings(
            google_api_key=settings.google_api_key,
            supabase_url=settings.supabase_url,
            supabase_service_role_key=settings.supabase_service_role_key,
            debug_console=True,
        )
    )
    return app, app.test_client()


def test_debug_console_disabled_by_default(client):
    assert client.get("/debug/events").status_code == 404
    assert client.get("/debug/requests/rid-1").status_code == 404
    assert client.post("/debug/clear").status_code == 404


def test_debug_console_records_pipeline_events(settings, fake_network):
    _, client = _debug_client(settings)

    client.post("/tts", json={"text": "hi", "fileName": "f"}, headers={"X-Request-Id": "rid-7"})
    events = client.get("/debug/events").get_json()["events"]

    tts_events = [e for e in events if e["category"] == "tts"]
    assert [e["message"] for e in tts_events] == ["synthesized", "uploaded"]
    assert all(e["request_id"] == "rid-7" for e in tts_events), "events should carry the request id"

    last_id = events[-1]["id"]
    newer = client.get(f"/debug/events?since={last_id}").get_json()["events"]
    assert all(e["id"] > last_id for e in newer), "since should filter out older events"
    assert client.get("/debug/events?since=abc").status_code == 400


def test_debug_request_view_lists_one_request(settings, fake_network):
    _, client = _debug_client(settings)
    fake_network.set_tts(403, {"error": {"message": "denied"}})

    client.post("/tts", json={"text": "hi", "fileName": "f"}, headers={"X-Request-Id": "rid-bad"})
    client.post("/tts", json={}, headers={"X-Request-Id": "rid-other"})
    body = client.get("/debug/requests/rid-bad").get_json()

    messages = [e["message"] for e in body["events"]]
    assert messages == ["POST /tts start", "synthesis failed", "POST /tts end"]
    assert body["events"][1]["data"]["status"] == 403
    assert body["events"][2]["data"]["status"] == 403, "end event records the mirrored status"


def test_debug_events_are_per_app(settings, fake_network):
    app_a, client_a = _debug_client(settings)
    _, client_b = _debug_client(settings)

    client_a.post("/tts", json={"text": "hi", "fileName": "f"})
    assert client_b.get("/debug/events").get_json()["events"][0]["message"] == "GET /debug/events start", (
        "another app's events must not leak in"
    )

    assert client_a.post("/debug/clear").get_json()["cleared"] is True
    remaining = app_a.extensions["speechdrop.debug_events"].list_since(0)
    assert all(e["category"] == "request" for e in remaining), "clear should drop pipeline events"


def test_event_log_is_bounded():
    events = DebugEventLog(max_events=3)
    for i in range(5):
        events.record("tts", f"e{i}")

    kept = events.list_since(0)
    assert [e["message"] for e in kept] == ["e2", "e3", "e4"], "oldest events fall off"
    assert kept[-1]["id"] == 5, "ids keep counting past the bound"
