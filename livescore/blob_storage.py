"""Helpers for uploading ad/logo images to the hosted blob store and
rewriting stored image URLs for display."""
from __future__ import annotations

import logging
import re
import time
from typing import Optional
from urllib.parse import quote

import requests

from . import settings
from .logging_utils import warn_once

log = logging.getLogger(__name__)

BLOB_HOST_MARKER = "vercel-storage.com"
BLOB_PROXY_PATH = "/api/blob-proxy"
_UNSAFE_NAME_RE = re.compile(r"[^a-zA-Z0-9\-_.]")


def sanitize_filename(name: str) -> str:
    return _UNSAFE_NAME_RE.sub("_", name or "file")


def is_valid_blob_url(url: str) -> bool:
    return bool(url) and (BLOB_HOST_MARKER in url or url.startswith("/ads/"))


def format_blob_url(url: Optional[str]) -> str:
    """Rewrite a stored image URL into something an <img> tag can load.

    Store URLs go through the blob proxy route; bare filenames resolve to the
    local ``/ads`` folder.
    """
    if not url:
        return ""
    if url.startswith("/"):
        return url
    if url.startswith("http") and BLOB_HOST_MARKER in url:
        return f"{BLOB_PROXY_PATH}?url={quote(url, safe='')}"
    if url.startswith("http"):
        return url
    return f"/ads/{re.sub(r'^/?ads/', '', url)}"


class BlobStorage:
    """Token-authenticated writes against the blob store HTTP API."""

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self.token = settings.BLOB_READ_WRITE_TOKEN if token is None else token
        self.api_url = (api_url or settings.BLOB_API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self, **extra: str) -> dict:
        headers = {"authorization": f"Bearer {self.token or ''}", "x-api-version": "7"}
        headers.update(extra)
        return headers

    def upload_file(
        self,
        filename: str,
        content: bytes,
        content_type: str = "application/octet-stream",
        folder: str = "ads",
    ) -> str:
        """Upload ``content`` and return its public URL.

        If the store rejects the upload (or no token is configured) the local
        fallback path ``/<folder>/<name>`` is returned instead.
        """
        name = f"{int(time.time() * 1000)}_{sanitize_filename(filename)}"
        pathname = f"{folder}/{name}"
        log.info("Uploading %s to blob storage", pathname)
        try:
            if not self.token:
                warn_once("blob_token_missing", "BLOB_READ_WRITE_TOKEN is not set", logger=log)
                raise RuntimeError("blob token not configured")
            resp = self.session.put(
                f"{self.api_url}/{pathname}",
                data=content,
                headers=self._headers(**{"x-content-type": content_type, "x-add-random-suffix": "0"}),
                timeout=self.timeout,
            )
            resp.raise_for_status()
            url = resp.json()["url"]
        except (requests.exceptions.RequestException, RuntimeError, KeyError, ValueError) as exc:
            log.warning("Failed to upload to blob storage, using fallback: %s", exc)
            return f"/{folder}/{name}"
        log.info("File uploaded to blob storage: %s", url)
        return url

    def delete_file(self, url: str) -> bool:
        if BLOB_HOST_MARKER not in (url or ""):
            log.debug("Not a blob store URL, nothing to delete: %s", url)
            return True
        try:
            resp = self.session.post(
                f"{self.api_url}/delete",
                json={"urls": [url]},
                headers=self._headers(),
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.exceptions.RequestException as exc:
            log.error("Error deleting blob %s: %s", url, exc)
            return False
        log.info("File deleted from blob storage: %s", url)
        return True

    is_valid_blob_url = staticmethod(is_valid_blob_url)
    format_blob_url = staticmethod(format_blob_url)


_storage: Optional[BlobStorage] = None


def get_storage() -> BlobStorage:
    global _storage
    if _storage is None:
        _storage = BlobStorage()
    return _storage


def set_storage(storage: Optional[BlobStorage]) -> None:
    global _storage
    _storage = storage
