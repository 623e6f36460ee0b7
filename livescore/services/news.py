"""News sync: NewsAPI articles (mock-translated) plus Thai sample items, upserted by slug."""
from __future__ import annotations

import logging
import re
from datetime import timedelta
from typing import Any, Dict, List, Optional

import requests
from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from .. import settings
from ..constants import NEWS_FETCH_LIMIT, NEWS_SUMMARY_LENGTH, SLUG_MAX_LENGTH
from ..db import get_engine, session_scope
from ..errors import APIError
from ..models import NewsArticle, utcnow_naive
from ..utils import create_retry_session, scrub_url, to_db_datetime, to_iso, utcnow
from .translation import translate_text

log = logging.getLogger(__name__)

_SLUG_DROP_RE = re.compile(r"[^\w\sก-๙]", re.ASCII)
_SPACE_RE = re.compile(r"\s+")
_DASHES_RE = re.compile(r"-+")


def create_slug(title: str) -> str:
    slug = _SLUG_DROP_RE.sub("", (title or "").lower())
    slug = _SPACE_RE.sub("-", slug)
    slug = _DASHES_RE.sub("-", slug)
    return slug[:SLUG_MAX_LENGTH]


def _summary(text: str) -> str:
    return (text or "")[:NEWS_SUMMARY_LENGTH] + "..."


_news_http: Optional[requests.Session] = None


def _get_news_session() -> requests.Session:
    global _news_http
    if _news_http is None:
        _news_http = create_retry_session(settings.NEWS_MAX_RETRIES)
    return _news_http


def fetch_international_news(session: Optional[requests.Session] = None) -> List[Dict[str, Any]]:
    """Pull the latest English football stories from NewsAPI and translate them."""
    from_date = (utcnow() - timedelta(days=2)).strftime("%Y-%m-%d")
    params = {
        "q": "football OR soccer",
        "language": "en",
        "from": from_date,
        "sortBy": "publishedAt",
        "apiKey": settings.NEWS_API_KEY,
    }
    http = session or _get_news_session()
    try:
        resp = http.get(settings.NEWS_API_URL, params=params, timeout=settings.NEWS_TIMEOUT)
        resp.raise_for_status()
    except requests.exceptions.RequestException as exc:
        status = getattr(getattr(exc, "response", None), "status_code", None)
        reason = status or type(exc).__name__
        log.error("NewsAPI request to %s failed: %s", scrub_url(settings.NEWS_API_URL), reason)
        raise APIError(
            "NewsAPI",
            str(status) if status else "network_error",
            f"Failed to fetch international news: {reason}",
        ) from exc

    try:
        data = resp.json()
    except ValueError as exc:
        log.error("News API returned a non-JSON body from %s", scrub_url(settings.NEWS_API_URL))
        raise APIError("NewsAPI", "invalid_json", "News API returned a non-JSON body") from exc

    raw_articles = data.get("articles") if isinstance(data, dict) else None
    if not isinstance(raw_articles, list):
        log.error("Invalid response format from News API: %s", str(data)[:200])
        return []

    articles = []
    for item in raw_articles[:NEWS_FETCH_LIMIT]:
        original_title = item.get("title") or ""
        original_content = item.get("description") or item.get("content") or ""
        title = translate_text(original_title, "en", "th")
        content = translate_text(original_content, "en", "th")
        articles.append({
            "title": title,
            "originalTitle": original_title,
            "content": content,
            "originalContent": original_content,
            "summary": _summary(content),
            "image": item.get("urlToImage"),
            "publishedAt": item.get("publishedAt"),
            "source": (item.get("source") or {}).get("name"),
            "url": item.get("url"),
            "category": "international",
            "slug": create_slug(title),
            "tags": ["football", "soccer", "international"],
        })
    return articles


def fetch_thai_news() -> List[Dict[str, Any]]:
    """Curated Thai football stories until a Thai news feed is wired in."""
    now = to_iso(utcnow())
    return [
        {
            "title": "เกียรติศักดิ์ เสนาเมือง เข้ารับตำแหน่งเฮดโค้ชทีมชาติไทยชุดใหญ่อีกครั้ง",
            "content": (
                'สมาคมกีฬาฟุตบอลแห่งประเทศไทยฯ ประกาศแต่งตั้ง "ซิโก้" เกียรติศักดิ์ เสนาเมือง '
                "อดีตกองหน้าทีมชาติไทย กลับมารับตำแหน่งหัวหน้าผู้ฝึกสอนทีมชาติไทยชุดใหญ่อีกครั้ง"
            ),
            "summary": 'สมาคมกีฬาฟุตบอลแห่งประเทศไทยฯ ประกาศแต่งตั้ง "ซิโก้" เกียรติศักดิ์ เสนาเมือง...',
            "image": "https://i.imgur.com/KEFZ8Qd.jpg",
            "publishedAt": now,
            "source": "ไทยรัฐ",
            "url": "https://www.thairath.co.th/sport",
            "category": "thai",
            "slug": "kiattisuk-senamuang-coach-thai-national-team",
            "tags": ["ทีมชาติไทย", "เกียรติศักดิ์ เสนาเมือง"],
        },
        {
            "title": "บุรีรัมย์คว้าแชมป์ไทยลีกสมัยที่ 9 สร้างสถิติใหม่",
            "content": (
                "บุรีรัมย์ ยูไนเต็ด สร้างประวัติศาสตร์คว้าแชมป์ไทยลีกสมัยที่ 9 ได้สำเร็จ "
                "หลังเปิดบ้านเอาชนะ การท่าเรือ เอฟซี 3-0 ในนัดสุดท้ายของฤดูกาล"
            ),
            "summary": "บุรีรัมย์ ยูไนเต็ด สร้างประวัติศาสตร์คว้าแชมป์ไทยลีกสมัยที่ 9 ได้สำเร็จ...",
            "image": "https://i.imgur.com/ZJSckuL.jpg",
            "publishedAt": now,
            "source": "สยามกีฬา",
            "url": "https://www.siamsport.co.th",
            "category": "thai",
            "slug": "buriram-united-ninth-thai-league-championship",
            "tags": ["ไทยลีก", "บุรีรัมย์ ยูไนเต็ด"],
        },
        {
            "title": "ธีรศิลป์ แดงดา ประกาศอำลาทีมชาติไทยหลังจบเอเชียนคัพ",
            "content": (
                "ธีรศิลป์ แดงดา กองหน้าทีมชาติไทย และเมืองทอง ยูไนเต็ด "
                "ประกาศอำลาทีมชาติไทยอย่างเป็นทางการ หลังจบการแข่งขันเอเชียนคัพ 2025"
            ),
            "summary": "ธีรศิลป์ แดงดา กองหน้าทีมชาติไทย และเมืองทอง ยูไนเต็ด ประกาศอำลาทีมชาติไทย...",
            "image": "https://i.imgur.com/rBcVzkf.jpg",
            "publishedAt": now,
            "source": "ไทยรัฐ",
            "url": "https://www.thairath.co.th/sport",
            "category": "thai",
            "slug": "teerasil-dangda-retirement-thai-national-team",
            "tags": ["ทีมชาติไทย", "ธีรศิลป์ แดงดา"],
        },
    ]


def _to_row(article: Dict[str, Any]) -> Dict[str, Any]:
    content = article.get("content") or ""
    return {
        "title": article["title"],
        "original_title": article.get("originalTitle"),
        "content": content,
        "original_content": article.get("originalContent"),
        "summary": article.get("summary") or _summary(content),
        "featured_image_url": article.get("image"),
        "source": article.get("source") or "Unknown",
        "published_at": to_db_datetime(article.get("publishedAt")) or utcnow_naive(),
        "url": article.get("url"),
        "status": "published",
        "slug": article.get("slug") or create_slug(article["title"]),
        "category": article["category"],
        "tags": article.get("tags") or [],
        "updated_at": utcnow_naive(),
    }


def _article_dict(row: NewsArticle) -> Dict[str, Any]:
    return {
        "id": row.id,
        "title": row.title,
        "originalTitle": row.original_title,
        "content": row.content,
        "originalContent": row.original_content,
        "summary": row.summary,
        "image": row.featured_image_url,
        "publishedAt": to_iso(row.published_at),
        "source": row.source,
        "url": row.url,
        "category": row.category,
        "slug": row.slug,
        "tags": row.tags or [],
    }


def save_news(articles: List[Dict[str, Any]]) -> int:
    """Upsert ``articles`` keyed by slug; existing rows are overwritten."""
    if not articles:
        log.info("No articles to save")
        return 0

    # Last one wins when a batch repeats a slug
    rows = list({r["slug"]: r for r in map(_to_row, articles)}.values())
    dialect = get_engine(admin=True).dialect.name
    insert = pg_insert if dialect == "postgresql" else sqlite_insert

    with session_scope(admin=True, action="save news articles") as s:
        for row in rows:
            stmt = insert(NewsArticle).values(**row)
            update_cols = {k: stmt.excluded[k] for k in row if k != "slug"}
            s.execute(stmt.on_conflict_do_update(index_elements=["slug"], set_=update_cols))
    log.info("Saved %d news articles", len(rows))
    return len(rows)


def get_news(category: Optional[str] = None, limit: int = NEWS_FETCH_LIMIT) -> List[Dict[str, Any]]:
    stmt = (
        select(NewsArticle)
        .where(NewsArticle.status == "published")
        .order_by(NewsArticle.published_at.desc())
        .limit(limit)
    )
    if category:
        stmt = stmt.where(NewsArticle.category == category)
    with session_scope(action="fetch news") as s:
        return [_article_dict(r) for r in s.scalars(stmt).all()]


def get_news_article_by_slug(slug: str) -> Optional[Dict[str, Any]]:
    with session_scope(action=f"fetch news article {slug}") as s:
        row = s.scalar(select(NewsArticle).where(NewsArticle.slug == slug))
        return _article_dict(row) if row is not None else None


def sync_all_news(session: Optional[requests.Session] = None) -> int:
    """Fetch both sources and upsert them. Any failure aborts the whole sync."""
    log.info("Starting news synchronization")
    international = fetch_international_news(session=session)
    log.info("Fetched %d international news articles", len(international))
    thai = fetch_thai_news()
    log.info("Fetched %d Thai news articles", len(thai))
    saved = save_news(international + thai)
    log.info("News synchronization completed")
    return saved
