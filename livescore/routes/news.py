from __future__ import annotations

import logging

from flask import Blueprint, request

from ..app_utils import make_error, make_ok, require_cron_secret, safe_int
from ..constants import NEWS_CATEGORIES, NEWS_FETCH_LIMIT
from ..errors import APIError, DatabaseError
from ..services import news as news_service

bp = Blueprint("news", __name__, url_prefix="/api/news")
log = logging.getLogger(__name__)


@bp.get("")
def list_news():
    category = request.args.get("category") or None
    if category and category not in NEWS_CATEGORIES:
        return make_error("invalid_category", f"category must be one of {', '.join(NEWS_CATEGORIES)}", 400)
    limit = max(1, min(safe_int(request.args.get("limit"), NEWS_FETCH_LIMIT), 100))
    try:
        articles = news_service.get_news(category=category, limit=limit)
    except DatabaseError as exc:
        return make_error(str(exc), "Failed to load news", 500)
    return make_ok(articles)


@bp.get("/sync")
@require_cron_secret
def sync():
    try:
        saved = news_service.sync_all_news()
    except (APIError, DatabaseError) as exc:
        log.error("News sync failed: %s", exc)
        details = exc.to_dict() if isinstance(exc, APIError) else str(exc)
        return make_error(details, "Failed to sync news", 500)
    return make_ok({"saved": saved}, "News synchronized successfully")


@bp.get("/<path:slug>")
def article(slug: str):
    try:
        item = news_service.get_news_article_by_slug(slug)
    except DatabaseError as exc:
        return make_error(str(exc), "Failed to load article", 500)
    if item is None:
        return make_error("not_found", "Article not found", 404)
    return make_ok(item)
