"""Storage adapters for a single serialized token record."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional, Union

import asyncpg

from .config import TokenConfig

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS fingerprint_tokens (
    slot TEXT PRIMARY KEY,
    record JSONB NOT NULL,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


class TokenStore(ABC):
    """Abstract storage backend holding one token record in wire form."""

    @abstractmethod
    async def load(self) -> Optional[Dict[str, Any]]:
        """Return the stored record, or None if nothing usable is stored."""

    @abstractmethod
    async def save(self, record: Dict[str, Any]) -> None:
        """Replace the stored record."""

    async def close(self) -> None:
        """Close store resources if needed."""


class InMemoryTokenStore(TokenStore):
    """In-memory storage backend."""

    def __init__(self) -> None:
        self.record: Optional[Dict[str, Any]] = None

    async def load(self) -> Optional[Dict[str, Any]]:
        return dict(self.record) if self.record is not None else None

    async def save(self, record: Dict[str, Any]) -> None:
        self.record = dict(record)


class JsonFileTokenStore(TokenStore):
    """Store the record as a pretty-printed JSON document on disk.

    Writes go to a temporary file in the same directory followed by
    ``os.replace``, so readers see either the old or the new document.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    async def load(self) -> Optional[Dict[str, Any]]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("ignoring unparseable token store %s", self.path)
            return None
        if not isinstance(data, dict):
            logger.warning("ignoring token store %s: not a JSON object", self.path)
            return None
        return data

    async def save(self, record: Dict[str, Any]) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{self.path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(record, fh, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise
        logger.debug("saved token record to %s", self.path)


class PostgresTokenStore(TokenStore):
    """Postgres-backed storage using asyncpg, one JSONB row per slot."""

    def __init__(self, dsn: str, *, slot: str = "default") -> None:
        self.dsn = dsn
        self.slot = slot
        self.pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self.pool is None:
            self.pool = await asyncpg.create_pool(dsn=self.dsn, min_size=1, max_size=4)
            async with self.pool.acquire() as conn:
                await conn.execute(CREATE_TABLE_SQL)

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def load(self) -> Optional[Dict[str, Any]]:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            row = await conn.fetchrow("SELECT record::text AS record FROM fingerprint_tokens WHERE slot=$1", self.slot)
            if row is None:
                return None
            data = json.loads(row["record"])
            return data if isinstance(data, dict) else None

    async def save(self, record: Dict[str, Any]) -> None:
        await self.connect()
        assert self.pool is not None
        async with self.pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO fingerprint_tokens (slot, record, updated_at)
                VALUES ($1, $2::jsonb, NOW())
                ON CONFLICT (slot) DO UPDATE SET record = EXCLUDED.record, updated_at = EXCLUDED.updated_at
                """,
                self.slot,
                json.dumps(record),
            )


def create_store_from_env(config: TokenConfig | None = None) -> TokenStore:
    """Create Postgres storage if a DSN is configured, otherwise a JSON file store."""
    config = config or TokenConfig.from_env()
    if config.dsn:
        return PostgresTokenStore(dsn=config.dsn)
    return JsonFileTokenStore(config.store_path)
