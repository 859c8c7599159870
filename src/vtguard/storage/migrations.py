# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Versioned database migration system for the vtguard database.

Applied versions are tracked in a ``schema_migrations`` table.  Each
migration is idempotent and is committed together with its version row.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Any

import aiosqlite

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Migration registry infrastructure
# ---------------------------------------------------------------------------

MigrationFunc = Callable[[aiosqlite.Connection], Coroutine[Any, Any, None]]


@dataclass(frozen=True, slots=True)
class Migration:
    """A single database migration."""

    version: int
    name: str
    func: MigrationFunc


# Ordered list of all migrations.  New migrations are appended here.
_MIGRATIONS: list[Migration] = []


def _register(version: int, name: str) -> Callable[[MigrationFunc], MigrationFunc]:
    """Decorator that registers a migration function."""

    def decorator(fn: MigrationFunc) -> MigrationFunc:
        _MIGRATIONS.append(Migration(version=version, name=name, func=fn))
        return fn

    return decorator


_CREATE_SCHEMA_MIGRATIONS = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


async def get_current_version(db: aiosqlite.Connection) -> int:
    """Return the highest applied migration version, or 0 if none."""
    await db.execute(_CREATE_SCHEMA_MIGRATIONS)
    await db.commit()
    cursor = await db.execute(
        "SELECT COALESCE(MAX(version), 0) FROM schema_migrations"
    )
    row = await cursor.fetchone()
    return int(row[0]) if row else 0


async def run_migrations(db: aiosqlite.Connection) -> list[Migration]:
    """Run all pending migrations in order and return those applied."""
    current = await get_current_version(db)
    applied: list[Migration] = []

    for migration in _MIGRATIONS:
        if migration.version <= current:
            continue

        logger.info(
            "Applying migration %03d: %s", migration.version, migration.name
        )
        await migration.func(db)
        await db.execute(
            "INSERT OR IGNORE INTO schema_migrations (version, name) VALUES (?, ?)",
            (migration.version, migration.name),
        )
        await db.commit()
        applied.append(migration)

    return applied


# =========================================================================
# Migration 001 -- key/list store backing the scan history
# =========================================================================

_CREATE_KV_LISTS = """
CREATE TABLE IF NOT EXISTS kv_lists (
    key TEXT NOT NULL,
    position INTEGER NOT NULL,
    value TEXT NOT NULL,
    PRIMARY KEY (key, position)
);
"""


@_register(1, "kv_lists")
async def _migration_001_kv_lists(db: aiosqlite.Connection) -> None:
    await db.execute(_CREATE_KV_LISTS)


# =========================================================================
# Migration 002 -- credential store
# =========================================================================

_CREATE_CREDENTIALS = """
CREATE TABLE IF NOT EXISTS credentials (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (datetime('now'))
);
"""


@_register(2, "credentials")
async def _migration_002_credentials(db: aiosqlite.Connection) -> None:
    await db.execute(_CREATE_CREDENTIALS)
