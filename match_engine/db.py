"""Centralized database engine factory.

All resources share a single SQLAlchemy engine per database URL and process.
Uses NullPool: connections are opened on demand and returned immediately
after use, so idle workers hold no connections. Blocking session work is
pushed to threads by the resources, which is safe with NullPool.

The URL comes from DATABASE_URL when set, otherwise it is assembled from the
POSTGRES_* variables.
"""

import os
import threading

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from match_engine.models.base import Base

_lock = threading.Lock()
_engines: dict[str, Engine] = {}
_session_factories: dict[str, sessionmaker] = {}


def build_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    host = os.getenv("POSTGRES_HOST", "localhost")
    port = os.getenv("POSTGRES_PORT", "5432")
    user = os.getenv("POSTGRES_USER", "matching")
    password = os.getenv("POSTGRES_PASSWORD", "matching_dev")
    database = os.getenv("POSTGRES_DB", "match_engine")
    return f"postgresql://{user}:{password}@{host}:{port}/{database}"


def get_engine(url: str | None = None) -> Engine:
    """Return the process-wide engine for ``url``, creating it on first call."""
    url = url or build_url()
    engine = _engines.get(url)
    if engine is None:
        with _lock:
            engine = _engines.get(url)
            if engine is None:
                connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
                engine = create_engine(url, poolclass=NullPool, connect_args=connect_args)
                _engines[url] = engine
                _session_factories[url] = sessionmaker(bind=engine, expire_on_commit=False)
    return engine


def get_session(url: str | None = None) -> Session:
    """Create a new session from the shared engine."""
    url = url or build_url()
    get_engine(url)
    return _session_factories[url]()


def create_tables(url: str | None = None) -> None:
    """Create every table known to the ORM (no-op for existing tables)."""
    Base.metadata.create_all(get_engine(url))
