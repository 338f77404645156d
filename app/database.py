"""
Database connection and session management.
"""
from __future__ import annotations

import logging
from typing import Any, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)

engine: Engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_timeout=settings.db_pool_timeout,
    pool_recycle=settings.db_pool_recycle,
    connect_args={
        "connect_timeout": settings.db_connect_timeout,
        # Server-side cap on every statement.
        "options": f"-c statement_timeout={settings.db_statement_timeout_ms}",
    },
    echo=False,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting a database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Create tables registered on the model metadata.
    """
    from app.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")


def dispose_engine() -> None:
    """Release every pooled connection."""
    engine.dispose()
    logger.info("Database connection pool disposed")


def check_database_connection(bind: Engine | None = None) -> bool:
    """
    Return True when the database connection is healthy.
    """
    try:
        with (bind or engine).connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        return False


def database_health(bind: Engine | None = None) -> dict[str, Any]:
    """
    Return structured database health details.
    """
    target = bind or engine
    try:
        with target.connect() as connection:
            connection.execute(text("SELECT 1"))
        return {
            "ok": True,
            "dialect": target.dialect.name,
            "pool": target.pool.status(),
        }
    except SQLAlchemyError as exc:
        logger.warning(f"Database health check failed: {exc}")
        return {
            "ok": False,
            "dialect": target.dialect.name,
            "error": "database unavailable",
        }
