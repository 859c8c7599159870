# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""SQLite connection management for the history and credential tables."""

from __future__ import annotations

import asyncio
import weakref
from pathlib import Path

import aiosqlite

from vtguard.core.exceptions import PersistenceError
from vtguard.storage.migrations import run_migrations

_db: aiosqlite.Connection | None = None
_write_locks: weakref.WeakKeyDictionary[aiosqlite.Connection, asyncio.Lock] = (
    weakref.WeakKeyDictionary()
)


def write_lock(db: aiosqlite.Connection) -> asyncio.Lock:
    """Return the lock that serialises write transactions on *db*.

    aiosqlite runs every statement on one connection in one implicit
    transaction, so two writers interleaving their statements would commit
    or roll back each other's work.
    """
    lock = _write_locks.get(db)
    if lock is None:
        lock = _write_locks[db] = asyncio.Lock()
    return lock


async def init_db(
    db_path: Path | str = "vtguard.db",
    *,
    auto_migrate: bool = True,
) -> aiosqlite.Connection:
    """Initialize the database connection, run migrations, return the connection.

    Repeated calls return the already-open connection.
    """
    global _db

    if _db is not None:
        return _db

    try:
        _db = await aiosqlite.connect(str(db_path))
        _db.row_factory = aiosqlite.Row

        # WAL keeps readers unblocked while a scan rewrites the history
        await _db.execute("PRAGMA journal_mode=WAL")

        if auto_migrate:
            await run_migrations(_db)

        return _db
    except Exception as exc:
        if _db is not None:
            await _db.close()
        _db = None
        msg = f"Failed to initialize database at {db_path}: {exc}"
        raise PersistenceError(msg) from exc


async def get_db() -> aiosqlite.Connection:
    """Get the active database connection.

    Raises PersistenceError if the database has not been initialized.
    """
    if _db is None:
        raise PersistenceError("Database not initialized. Call init_db() first.")
    return _db


async def close_db() -> None:
    """Close the database connection."""
    global _db

    if _db is not None:
        await _db.close()
        _db = None
