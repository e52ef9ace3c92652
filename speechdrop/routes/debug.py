from __future__ import annotations

from flask import Blueprint, request

from speechdrop.utils.debug_events import event_log
from speechdrop.utils.json_helpers import jerror, jok


debug_bp = Blueprint("debug", __name__)


@debug_bp.get("/debug/events")
def debug_events():
    events = event_log()
    if events is None:
        return jerror("Debug console disabled", 404)
    try:
        since = int(request.args.get("since") or 0)
    except ValueError:
        return jerror("'since' must be an integer", 400)
    return jok({"events": events.list_since(since)})


@debug_bp.get("/debug/requests/<request_id>")
def debug_request_events(request_id: str):
    """Everything recorded for one request id: the request itself plus its TTS steps."""
    events = event_log()
    if events is None:
        return jerror("Debug console disabled", 404)
    return jok({"request_id": request_id, "events": events.for_request(request_id)})


@debug_bp.post("/debug/clear")
def debug_clear():
    events = event_log()
    if events is None:
        return jerror("Debug console disabled", 404)
    events.clear()
    return jok({"cleared": True})
