"""Livescore DB models. (SQLite/PostgreSQL compatible)

Timestamps are stored as naive UTC datetimes.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase


def _uuid() -> str:
    return str(uuid.uuid4())


def utcnow_naive() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


# ---- advertisements ----
class Advertisement(Base):
    __tablename__ = "advertisements"

    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(200), nullable=False)
    position = Column(String(20), nullable=False)
    size = Column(String(10), nullable=False)
    image_url = Column(Text, nullable=False, default="")
    url = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default="active")
    start_date = Column(DateTime, nullable=False, default=utcnow_naive)
    end_date = Column(DateTime, nullable=False, default=utcnow_naive)
    impressions = Column(Integer, nullable=False, default=0)
    clicks = Column(Integer, nullable=False, default=0)
    ctr = Column(Float, nullable=False, default=0.0)
    revenue = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=utcnow_naive)
    updated_at = Column(DateTime, default=utcnow_naive)

    __table_args__ = (
        Index("ix_advertisements_position_status", "position", "status"),
    )


# ---- news ----
class NewsArticle(Base):
    __tablename__ = "news_articles"

    id = Column(String(36), primary_key=True, default=_uuid)
    title = Column(Text, nullable=False)
    original_title = Column(Text)
    content = Column(Text, nullable=False, default="")
    original_content = Column(Text)
    summary = Column(Text)
    featured_image_url = Column(Text)
    source = Column(String(200), default="Unknown")
    published_at = Column(DateTime, default=utcnow_naive)
    url = Column(Text)
    status = Column(String(20), default="published")
    slug = Column(String(120), nullable=False, unique=True)
    category = Column(String(20), nullable=False)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime, default=utcnow_naive)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)

    __table_args__ = (
        Index("ix_news_articles_category_published", "category", "published_at"),
    )


# ---- users ----
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(200))
    role = Column(String(20), nullable=False, default="user")
    is_active = Column(Boolean, nullable=False, default=True)
    password_hash = Column(String(255), nullable=False)
    last_login = Column(DateTime)
    created_at = Column(DateTime, default=utcnow_naive)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


# ---- settings ----
class SiteSetting(Base):
    __tablename__ = "site_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    setting_type = Column(String(50), nullable=False, unique=True)
    setting_value = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=utcnow_naive)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


class ApiSettings(Base):
    __tablename__ = "api_settings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    api_key = Column(String(255), default="")
    api_host = Column(String(255), default="v3.football.api-sports.io")
    api_version = Column(String(10), default="v3")
    cache_timeout = Column(Integer, default=5)
    request_limit = Column(Integer, default=100)
    polling_interval = Column(Integer, default=60)
    proxy_enabled = Column(Boolean, default=True)
    debug_mode = Column(Boolean, default=False)
    endpoints = Column(JSON, default=dict)
    created_at = Column(DateTime, default=utcnow_naive)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


class Setting(Base):
    __tablename__ = "settings"

    key = Column(String(100), primary_key=True)
    value = Column(JSON)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


# ---- declared by the schema bootstrap, not written by the services ----
class Match(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True)
    league_id = Column(Integer)
    home_team = Column(String(200))
    away_team = Column(String(200))
    home_score = Column(Integer)
    away_score = Column(Integer)
    status = Column(String(10))
    start_time = Column(DateTime)
    data = Column(JSON)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


class League(Base):
    __tablename__ = "leagues"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    country = Column(String(100))
    logo = Column(Text)
    season = Column(Integer)
    updated_at = Column(DateTime, default=utcnow_naive, onupdate=utcnow_naive)


class ApiCache(Base):
    __tablename__ = "api_cache"

    key = Column(String(500), primary_key=True)
    data = Column(JSON)
    expires_at = Column(DateTime)
    created_at = Column(DateTime, default=utcnow_naive)
