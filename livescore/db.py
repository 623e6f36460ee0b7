"""Database engine/session bootstrap for the livescore backend.

Two engines are kept: the regular one for reads and the "admin" one, built
from ``DATABASE_ADMIN_URL``, for writes that must bypass row-level security
on the hosted database. When both URLs are the same a single engine is shared.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from . import settings
from .errors import DatabaseError
from .models import Base

log = logging.getLogger(__name__)

_engine: Optional[Engine] = None
_admin_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None
_AdminSessionLocal: Optional[sessionmaker] = None


def _build_engine(url: str, **kwargs: Any) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=False, future=True, **kwargs)


def configure(url: Optional[str] = None, admin_url: Optional[str] = None, **engine_kwargs: Any) -> None:
    """(Re)build both engines. Tests call this with an in-memory URL."""
    global _engine, _admin_engine, _SessionLocal, _AdminSessionLocal
    url = url or settings.DATABASE_URL
    admin_url = admin_url or (settings.DATABASE_ADMIN_URL if url == settings.DATABASE_URL else url)

    _engine = _build_engine(url, **engine_kwargs)
    _admin_engine = _engine if admin_url == url else _build_engine(admin_url, **engine_kwargs)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)
    _AdminSessionLocal = sessionmaker(bind=_admin_engine, expire_on_commit=False)


def get_engine(admin: bool = False) -> Engine:
    if _engine is None:
        configure()
    return _admin_engine if admin else _engine


@contextmanager
def session_scope(admin: bool = False, action: str = "access the database") -> Iterator[Session]:
    """Yield a session, committing on success and rolling back on failure.

    Driver errors surface as :class:`DatabaseError` ("Failed to <action>: ...").
    """
    if _engine is None:
        configure()
    factory = _AdminSessionLocal if admin else _SessionLocal
    session = factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        log.error("Database error while trying to %s: %s", action, exc)
        raise DatabaseError(f"Failed to {action}: {exc}") from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db() -> bool:
    """Create every declared table; returns False when the database is unreachable."""
    try:
        Base.metadata.create_all(get_engine(admin=True))
    except SQLAlchemyError as exc:
        log.error("Error initializing database: %s", exc)
        return False
    log.info("Database tables ensured: %s", ", ".join(sorted(Base.metadata.tables)))
    return True


def table_names() -> list[str]:
    return sorted(Base.metadata.tables)
