"""
Utility functions for the Playjoy Livescore backend
Shared helpers for retrying sessions, URL scrubbing and timestamps
"""

from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import urlsplit, urlunsplit

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry


ISO = "%Y-%m-%dT%H:%M:%SZ"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_iso(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts ``datetime`` objects (naive ones are treated as UTC), strings with
    a trailing ``Z`` or an explicit offset, and plain ``YYYY-MM-DD`` dates.
    Returns None for empty input; raises ValueError for unparseable text.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """Render a datetime as ISO-8601 UTC; naive values are assumed UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime(ISO)


def scrub_url(url: Optional[str]) -> str:
    """Strip the query string so keys passed as params never reach the logs."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
        return urlunsplit((parts.scheme, parts.netloc, parts.path, "", parts.fragment))
    except ValueError:
        return url or ""


RETRYABLE_STATUSES = (429, 500, 502, 503, 504)


def create_retry_session(max_retries, backoff_factor=0.5, status_forcelist=RETRYABLE_STATUSES):
    """Session whose adapters retry GETs on connection errors and throttling/5xx answers.

    Retries happen inside urllib3; once they run out the last response is
    returned as-is so callers decide via ``raise_for_status``.
    """
    retry = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=tuple(status_forcelist),
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry)
    for prefix in ("https://", "http://"):
        session.mount(prefix, adapter)
    return session


def to_db_datetime(value: Any) -> Optional[datetime]:
    """Coerce an ISO string or datetime into the naive-UTC form stored in the DB."""
    dt = parse_iso(value)
    return dt.replace(tzinfo=None) if dt is not None else None
