from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote

import requests

from speechdrop.config import Settings


def supabase_enabled(settings: Settings) -> bool:
    return settings.storage_configured


def supabase_headers(settings: Settings, content_type: str = "application/json") -> Dict[str, str]:
    key = settings.supabase_service_role_key or ""
    return {
        "apikey": key,
        "Authorization": f"Bearer {key}",
        "Content-Type": content_type,
    }


def supabase_object_url(settings: Settings, bucket: str, key: str) -> str:
    return f"{settings.supabase_url}/storage/v1/object/{quote(bucket, safe='')}/{quote(key, safe='')}"


def supabase_public_url(settings: Settings, bucket: str, key: str) -> str:
    return f"{settings.supabase_url}/storage/v1/object/public/{quote(bucket, safe='')}/{quote(key, safe='')}"


def supabase_post(
    url: str,
    headers: Dict[str, str],
    data: Optional[bytes] = None,
    timeout: Optional[float] = None,
):
    return requests.post(url, headers=headers, data=data, timeout=timeout)


def supabase_error_message(resp) -> str:
    """Pull the human readable part out of a Storage API error response."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for field in ("message", "error"):
            if body.get(field):
                return str(body[field])
    return resp.text or f"HTTP {resp.status_code}"
