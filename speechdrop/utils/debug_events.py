from __future__ import annotations

import time
from collections import deque
from threading import Lock
from typing import Any, Dict, List, Optional

from flask import Flask, current_app, has_app_context

_EXTENSION_KEY = "speechdrop.debug_events"


class DebugEventLog:
    """Bounded, per-app record of request and TTS pipeline events."""

    def __init__(self, max_events: int = 500):
        self._lock = Lock()
        self._events: deque = deque(maxlen=max(1, max_events))
        self._last_id = 0

    def record(
        self,
        category: str,
        message: str,
        *,
        data: Optional[Dict[str, Any]] = None,
        request_id: Optional[str] = None,
        level: str = "info",
    ) -> Dict[str, Any]:
        with self._lock:
            self._last_id += 1
            event = {
                "id": self._last_id,
                "ts": time.time(),
                "level": level,
                "category": category,
                "message": message,
                "request_id": request_id or "",
                "data": data or {},
            }
            self._events.append(event)
        return event

    def list_since(self, since_id: int = 0) -> List[Dict[str, Any]]:
        with self._lock:
            return [e for e in self._events if e["id"] > since_id]

    def for_request(self, request_id: str) -> List[Dict[str, Any]]:
        with self._lock:
            return [e for e in self._events if e["request_id"] == request_id]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


def install_event_log(app: Flask, max_events: int) -> DebugEventLog:
    events = DebugEventLog(max_events)
    app.extensions[_EXTENSION_KEY] = events
    return events


def event_log() -> Optional[DebugEventLog]:
    """The current app's log, or None when its Settings leave the console off."""
    if not has_app_context():
        return None
    return current_app.extensions.get(_EXTENSION_KEY)


def record_event(
    category: str,
    message: str,
    *,
    data: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
    level: str = "info",
) -> Dict[str, Any]:
    events = event_log()
    if events is None:
        return {}
    return events.record(category, message, data=data, request_id=request_id, level=level)
