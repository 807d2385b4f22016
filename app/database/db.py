"""Database connection and session management."""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import get_config

logger = logging.getLogger(__name__)

config = get_config()
DATABASE_URL = config.DATABASE_URL
FALLBACK_SQLITE_URL = "sqlite:///./ledgerdesk.db"


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine; SQLite engines get foreign key enforcement switched on."""
    echo = kwargs.pop("echo", False)
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        pool_size=10,
        max_overflow=20,
        **kwargs,
    )


def _configure_engine(database_url: str) -> None:
    global DATABASE_URL, engine, SessionLocal
    DATABASE_URL = database_url
    engine = build_engine(database_url, echo=config.DEBUG and config.LOG_LEVEL == "DEBUG")
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


_configure_engine(DATABASE_URL)


def get_engine() -> Engine:
    """Return the active SQLAlchemy engine."""
    return engine


def get_active_database_url() -> str:
    """Return the currently bound database URL (after fallback, if any)."""
    return DATABASE_URL


def reset_engine(database_url: str | None = None) -> None:
    """Rebind engine/sessionmaker to the given URL (or current active URL)."""
    _configure_engine(database_url or DATABASE_URL)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session for FastAPI dependencies."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


get_db_session = contextmanager(get_db)


def _ping(target: Engine) -> None:
    with target.connect() as conn:
        conn.execute(text("SELECT 1"))


def verify_database_connection() -> bool:
    """Check connectivity; an optional Postgres outage falls back to local SQLite."""
    try:
        _ping(engine)
        return True
    except Exception as exc:  # pragma: no cover - exercised in deployment.
        if config.DB_CONNECTIVITY_REQUIRED:
            logger.exception("database.connection_failed", extra={"event": "database.connection_failed"})
            return False
        logger.warning(
            "database.connection_failed.optional: %s",
            exc,
            extra={"event": "database.connection_failed.optional"},
        )
        return _fallback_to_sqlite()


def _fallback_to_sqlite() -> bool:
    if DATABASE_URL.startswith("sqlite"):
        return False

    original_url = DATABASE_URL
    _configure_engine(FALLBACK_SQLITE_URL)
    try:
        _ping(engine)
    except Exception as exc:  # pragma: no cover - deployment edge case.
        _configure_engine(original_url)
        logger.error(
            "database.connection_fallback.failed: %s",
            exc,
            extra={"event": "database.connection_fallback.failed"},
        )
        return False

    logger.warning("database.connection_fallback.sqlite", extra={"event": "database.connection_fallback.sqlite"})
    return True
