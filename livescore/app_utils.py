import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from . import settings
from .errors import APIError, ValidationError

log = logging.getLogger(__name__)


def make_ok(data: Optional[Any] = None, message: str = "success", status_code: int = 200):
    """Return a standardized success response."""
    payload = {
        "status": "ok",
        "message": message,
        "data": data,
    }
    return jsonify(payload), status_code


def make_error(error: Any, message: str = "An error occurred", status_code: int = 400):
    """Return a standardized error response."""
    if isinstance(error, (APIError, ValidationError)):
        error = error.to_dict()

    payload = {
        "status": "error",
        "message": message,
        "error": error,
    }
    return jsonify(payload), status_code


def parse_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


def safe_int(value: Any, default: Optional[int] = None) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return ""


def require_cron_secret(func):
    """In production, require ``Authorization: Bearer <CRON_SECRET_KEY>``."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if settings.IS_PRODUCTION:
            secret = settings.CRON_SECRET_KEY
            if not secret or _bearer_token() != secret:
                log.warning("Rejected unauthorized cron call to %s", request.path)
                return make_error("unauthorized", "Unauthorized", 401)
        return func(*args, **kwargs)

    return wrapper
