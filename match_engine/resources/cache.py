"""Key-value caches for computed match fragments.

The cache is best-effort: callers treat any failure as a miss.
"""

import asyncio
import time
from datetime import UTC, datetime, timedelta

from dagster import ConfigurableResource
from pydantic import Field, PrivateAttr
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from match_engine.db import get_session
from match_engine.errors import CollaboratorUnavailableError
from match_engine.models.cache import CacheEntry


class CacheResource(ConfigurableResource):
    """get(key) -> bytes | None and set(key, value, ttl_seconds)."""

    async def get(self, key: str) -> bytes | None:
        raise NotImplementedError

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        raise NotImplementedError


class InMemoryCacheResource(CacheResource):
    """Process-local cache with per-entry expiry."""

    _entries: dict[str, tuple[float, bytes]] = PrivateAttr(default_factory=dict)

    async def get(self, key: str) -> bytes | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            self._entries.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        self._entries[key] = (time.monotonic() + ttl_seconds, value)

    def clear(self) -> None:
        self._entries.clear()


class PostgresCacheResource(CacheResource):
    """Cache rows in the match_cache table of the shared database.

    Uses sync sessions wrapped in asyncio.to_thread to avoid blocking the
    event loop. Concurrent writers of the same key: last write wins.
    Database errors are raised as CollaboratorUnavailableError.
    """

    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy URL; defaults to DATABASE_URL / POSTGRES_* settings",
    )

    def _lookup(self, key: str) -> bytes | None:
        session = get_session(self.database_url)
        try:
            row = session.execute(
                select(CacheEntry).where(CacheEntry.key == key)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise CollaboratorUnavailableError("cache", str(exc)) from exc
        finally:
            session.close()
        if row is None:
            return None
        expires_at = row.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        if expires_at <= datetime.now(UTC):
            return None
        return row.value

    def _store(self, key: str, value: bytes, ttl_seconds: int) -> None:
        session = get_session(self.database_url)
        try:
            session.merge(
                CacheEntry(
                    key=key,
                    value=value,
                    expires_at=datetime.now(UTC) + timedelta(seconds=ttl_seconds),
                )
            )
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise CollaboratorUnavailableError("cache", str(exc)) from exc
        finally:
            session.close()

    async def get(self, key: str) -> bytes | None:
        return await asyncio.to_thread(self._lookup, key)

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> None:
        await asyncio.to_thread(self._store, key, value, ttl_seconds)

    def purge_expired(self) -> int:
        """Delete expired rows; returns how many were removed."""
        session = get_session(self.database_url)
        try:
            result = session.execute(
                delete(CacheEntry).where(CacheEntry.expires_at <= datetime.now(UTC))
            )
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise CollaboratorUnavailableError("cache", str(exc)) from exc
        finally:
            session.close()
        return result.rowcount
