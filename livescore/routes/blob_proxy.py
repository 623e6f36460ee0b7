"""Relay blob-store images through our own origin to avoid CORS problems."""
from __future__ import annotations

import logging
import re
from typing import Optional

import requests
from flask import Blueprint, Response, jsonify, redirect, request

from .. import settings

bp = Blueprint("blob_proxy", __name__, url_prefix="/api")
log = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(r"storage\.example\.com/ads/(.+)")

_http: Optional[requests.Session] = None


def _get_http() -> requests.Session:
    global _http
    if _http is None:
        _http = requests.Session()
    return _http


def _serve_local() -> bool:
    return not settings.IS_PRODUCTION or settings.USE_LOCAL_FILES


@bp.get("/blob-proxy")
def blob_proxy():
    url = request.args.get("url")
    if not url:
        return jsonify({"error": "URL parameter is required"}), 400

    match = _PLACEHOLDER_RE.search(url)
    if match:
        path = match.group(1)
        if _serve_local() or not settings.BLOB_PUBLIC_BASE_URL:
            return redirect(f"/ads/{path}")
        url = f"{settings.BLOB_PUBLIC_BASE_URL.rstrip('/')}/ads/{path}"

    if url.startswith("/ads/"):
        return redirect(url)

    try:
        upstream = _get_http().get(url, timeout=30)
    except requests.exceptions.RequestException as exc:
        log.error("Error in blob proxy for %s: %s", url, exc)
        return jsonify({"error": "Failed to proxy the requested URL", "details": str(exc)}), 500

    if not upstream.ok:
        log.error("Blob proxy upstream %s returned %s", url, upstream.status_code)
        return (
            jsonify({"error": f"Failed to fetch from the provided URL: {upstream.reason}"}),
            upstream.status_code,
        )

    return Response(
        upstream.content,
        headers={
            "Content-Type": upstream.headers.get("content-type", "application/octet-stream"),
            "Cache-Control": "public, max-age=86400",
            "Access-Control-Allow-Origin": "*",
        },
    )
