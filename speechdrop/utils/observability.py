from __future__ import annotations

from typing import Any, Dict, Optional

from flask import g, has_request_context

from speechdrop.utils.debug_events import record_event


def current_request_id() -> Optional[str]:
    if not has_request_context():
        return None
    return getattr(g, "request_id", None)


def log_event(
    category: str,
    message: str,
    *,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return record_event(
        category,
        message,
        data=data or {},
        request_id=current_request_id(),
        level=level,
    )
