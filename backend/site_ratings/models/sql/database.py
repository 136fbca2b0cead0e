"""Database configuration and session management.

The engine is created lazily so importing the models never requires a
database driver; tests bind their own engine (usually SQLite) instead.
"""

from functools import lru_cache
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import QueuePool

from site_ratings.config import get_database_url


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def build_engine(database_url: Optional[str] = None) -> Engine:
    """Create an engine for the given URL (default: configured DATABASE_URL)."""
    url = database_url or get_database_url()

    if url.startswith("sqlite"):
        return create_engine(url, future=True)

    return create_engine(
        url,
        future=True,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before using
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``."""
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


@lru_cache()
def get_engine() -> Engine:
    """Application engine, created on first use."""
    return build_engine()


@lru_cache()
def get_session_factory() -> sessionmaker:
    """Application session factory, created on first use."""
    return build_session_factory(get_engine())
