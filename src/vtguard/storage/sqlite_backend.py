# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite implementation of :class:`ListStore` via aiosqlite."""

from __future__ import annotations

import logging

import aiosqlite

from vtguard.core.exceptions import PersistenceError
from vtguard.storage.backend import ListStore
from vtguard.storage.database import write_lock

logger = logging.getLogger("vtguard.storage.sqlite_backend")


class SQLiteListStore(ListStore):
    """Store each list as ``(key, position, value)`` rows in ``kv_lists``.

    The connection is owned by :mod:`vtguard.storage.database`; ``close``
    does not close it.
    """

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def get_list(self, key: str) -> list[str] | None:
        try:
            cursor = await self._db.execute(
                "SELECT value FROM kv_lists WHERE key = ? ORDER BY position",
                (key,),
            )
            rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            raise PersistenceError(f"Failed to read '{key}': {exc}") from exc
        if not rows:
            return None
        return [row[0] for row in rows]

    async def set_list(self, key: str, values: list[str]) -> None:
        async with write_lock(self._db):
            try:
                await self._db.execute("DELETE FROM kv_lists WHERE key = ?", (key,))
                await self._db.executemany(
                    "INSERT INTO kv_lists (key, position, value) VALUES (?, ?, ?)",
                    [(key, position, value) for position, value in enumerate(values)],
                )
                await self._db.commit()
            except aiosqlite.Error as exc:
                await self._db.rollback()
                raise PersistenceError(f"Failed to write '{key}': {exc}") from exc
        logger.debug("Persisted %d entries under '%s'", len(values), key)

    async def close(self) -> None:
        return None
