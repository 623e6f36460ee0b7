"""Football API connection settings stored in the database, with env fallbacks."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

import requests
from sqlalchemy import select

from .. import settings
from ..api_client import FootballApiClient, TTLCache
from ..constants import DEFAULT_API_ENDPOINT_FLAGS
from ..db import session_scope
from ..errors import APIError, DatabaseError
from ..models import ApiSettings, utcnow_naive

log = logging.getLogger(__name__)

_FIELDS = {
    "apiKey": "api_key",
    "apiHost": "api_host",
    "apiVersion": "api_version",
    "cacheTimeout": "cache_timeout",
    "requestLimit": "request_limit",
    "pollingInterval": "polling_interval",
    "proxyEnabled": "proxy_enabled",
    "debugMode": "debug_mode",
    "endpoints": "endpoints",
}


def mask_key(key: Optional[str]) -> str:
    if not key:
        return ""
    if len(key) <= 6:
        return "*" * len(key)
    return f"{key[:3]}...{key[-3:]}"


def default_api_settings() -> Dict[str, Any]:
    return {
        "id": None,
        "apiKey": settings.API_KEY,
        "apiHost": settings.API_HOST,
        "apiVersion": settings.API_VERSION,
        "cacheTimeout": 5,
        "requestLimit": 100,
        "pollingInterval": 60,
        "proxyEnabled": True,
        "debugMode": False,
        "endpoints": dict(DEFAULT_API_ENDPOINT_FLAGS),
        "source": "environment",
    }


def _to_dict(row: ApiSettings) -> Dict[str, Any]:
    defaults = default_api_settings()
    out = {"id": row.id, "source": "database"}
    for key, column in _FIELDS.items():
        value = getattr(row, column)
        out[key] = value if value not in (None, "") else defaults[key]
    # The proxy is always on
    out["proxyEnabled"] = True
    return out


def get_api_settings(masked: bool = False) -> Dict[str, Any]:
    """Latest stored settings, or environment defaults when none exist or the DB fails."""
    try:
        with session_scope(action="fetch API settings") as s:
            row = s.scalar(select(ApiSettings).order_by(ApiSettings.id.desc()).limit(1))
            result = _to_dict(row) if row is not None else default_api_settings()
    except DatabaseError as exc:
        log.warning("Falling back to environment API settings: %s", exc)
        result = default_api_settings()
    if masked:
        result["apiKey"] = mask_key(result["apiKey"])
    return result


def _columns(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {column: data[key] for key, column in _FIELDS.items() if key in data}


def create_api_settings(data: Mapping[str, Any]) -> Dict[str, Any]:
    with session_scope(admin=True, action="create API settings") as s:
        row = ApiSettings(**_columns(data))
        s.add(row)
        s.flush()
        result = _to_dict(row)
    result["apiKey"] = mask_key(result["apiKey"])
    return result


def update_api_settings(settings_id: int, data: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    values = _columns(data)
    # A masked key echoed back by the form must not overwrite the real one
    if "api_key" in values and (not values["api_key"] or "..." in str(values["api_key"])):
        values.pop("api_key")
    with session_scope(admin=True, action="update API settings") as s:
        row = s.get(ApiSettings, settings_id)
        if row is None:
            return None
        for column, value in values.items():
            setattr(row, column, value)
        row.updated_at = utcnow_naive()
        s.flush()
        result = _to_dict(row)
    result["apiKey"] = mask_key(result["apiKey"])
    return result


def client_from_settings(
    cfg: Optional[Dict[str, Any]] = None,
    session: Optional[requests.Session] = None,
) -> FootballApiClient:
    cfg = cfg or get_api_settings()
    return FootballApiClient(
        cfg["apiKey"],
        cfg["apiHost"],
        cfg["apiVersion"],
        session=session,
        cache=TTLCache(),
    )


def test_connection(session: Optional[requests.Session] = None) -> Dict[str, Any]:
    """Call the ``status`` endpoint with the active settings."""
    client = client_from_settings(session=session)
    try:
        data = client.fetch_from_api("status", cache_duration=0)
    except APIError as exc:
        log.warning("API connection test failed: %s", exc.message)
        return {"success": False, "error": exc.to_dict()}
    errors = data.get("errors") if isinstance(data, dict) else None
    if errors:
        return {"success": False, "error": {"source": "API-Football", "code": "api_error", "message": str(errors)}}
    return {"success": True, "response": (data or {}).get("response")}
