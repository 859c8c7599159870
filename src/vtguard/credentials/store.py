# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Get/set key-value credential stores."""

from __future__ import annotations

import abc
import logging

import aiosqlite

from vtguard.core.exceptions import PersistenceError
from vtguard.storage.database import write_lock

logger = logging.getLogger("vtguard.credentials.store")


class CredentialStore(abc.ABC):
    """Abstract key-value store for secrets such as the API key."""

    @abc.abstractmethod
    async def read(self, key: str) -> str | None:
        """Return the secret stored under *key*, or ``None``."""

    @abc.abstractmethod
    async def write(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing any previous value."""

    @abc.abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove *key*.  Returns ``True`` if it existed."""


class MemoryCredentialStore(CredentialStore):
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    async def read(self, key: str) -> str | None:
        return self._values.get(key)

    async def write(self, key: str, value: str) -> None:
        self._values[key] = value

    async def delete(self, key: str) -> bool:
        return self._values.pop(key, None) is not None


class SQLiteCredentialStore(CredentialStore):
    """Credentials kept in the ``credentials`` table of the vtguard database."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def read(self, key: str) -> str | None:
        try:
            cursor = await self._db.execute(
                "SELECT value FROM credentials WHERE key = ?", (key,)
            )
            row = await cursor.fetchone()
        except aiosqlite.Error as exc:
            raise PersistenceError(f"Failed to read credential '{key}': {exc}") from exc
        return row[0] if row else None

    async def write(self, key: str, value: str) -> None:
        try:
            async with write_lock(self._db):
                await self._db.execute(
                    """
                    INSERT INTO credentials (key, value) VALUES (?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = datetime('now')
                    """,
                    (key, value),
                )
                await self._db.commit()
        except aiosqlite.Error as exc:
            raise PersistenceError(f"Failed to store credential '{key}': {exc}") from exc
        logger.info("Stored credential '%s'", key)

    async def delete(self, key: str) -> bool:
        try:
            async with write_lock(self._db):
                cursor = await self._db.execute(
                    "DELETE FROM credentials WHERE key = ?", (key,)
                )
                await self._db.commit()
        except aiosqlite.Error as exc:
            raise PersistenceError(f"Failed to delete credential '{key}': {exc}") from exc
        return cursor.rowcount > 0


class OverrideCredentialStore(CredentialStore):
    """Serve fixed values ahead of a wrapped store.

    Used to let ``VTGUARD_API_KEY`` take precedence over the stored key
    without persisting it.  Writes and deletes go to the wrapped store.
    """

    def __init__(self, inner: CredentialStore, overrides: dict[str, str]) -> None:
        self._inner = inner
        self._overrides = {k: v for k, v in overrides.items() if v}

    async def read(self, key: str) -> str | None:
        if key in self._overrides:
            return self._overrides[key]
        return await self._inner.read(key)

    async def write(self, key: str, value: str) -> None:
        await self._inner.write(key, value)

    async def delete(self, key: str) -> bool:
        return await self._inner.delete(key)
