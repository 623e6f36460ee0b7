"""Server-side relay to the football API so the key never reaches the browser."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import requests
from flask import Blueprint, jsonify, request

from ..constants import RATE_LIMIT_HEADERS
from ..services import api_settings
from ..utils import scrub_url

bp = Blueprint("proxy", __name__, url_prefix="/api")
log = logging.getLogger(__name__)

_http: Optional[requests.Session] = None


def _get_http() -> requests.Session:
    global _http
    if _http is None:
        _http = requests.Session()
    return _http


@bp.get("/proxy")
def proxy():
    endpoint = request.args.get("endpoint")
    if not endpoint:
        return jsonify({"error": "Missing endpoint parameter"}), 400

    params = [(k, v) for k, v in request.args.items(multi=True) if k != "endpoint"]
    cfg = api_settings.get_api_settings()
    client = api_settings.client_from_settings(cfg, session=_get_http())
    url = client.build_url(endpoint, params)

    if cfg.get("debugMode"):
        log.info("[proxy] key=%s url=%s", api_settings.mask_key(cfg.get("apiKey")), scrub_url(url))

    try:
        upstream = client.session.get(url, headers=client.headers, timeout=client.timeout)
    except requests.exceptions.RequestException as exc:
        log.error("[proxy] request to %s failed: %s", scrub_url(url), exc)
        return jsonify({"error": str(exc)}), 500

    if not 200 <= upstream.status_code < 300:
        log.error("[proxy] upstream returned %s for %s", upstream.status_code, endpoint)
        return (
            jsonify({"error": f"API returned status {upstream.status_code}", "details": upstream.text}),
            upstream.status_code,
        )

    try:
        body = upstream.json()
    except ValueError as exc:
        return jsonify({"error": f"Invalid JSON from upstream: {exc}"}), 500

    response = jsonify(body)
    response.headers["x-proxy-time"] = datetime.now(timezone.utc).isoformat()
    for header in RATE_LIMIT_HEADERS:
        value = upstream.headers.get(header)
        if value:
            response.headers[header] = value
    return response
