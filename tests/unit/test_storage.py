# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Tests for the SQLite database, migrations, list store and credential stores."""

from __future__ import annotations

import asyncio

import aiosqlite
import pytest
from conftest import make_record

from vtguard.core.constants import API_KEY_NAME
from vtguard.core.exceptions import PersistenceError
from vtguard.credentials.store import (
    MemoryCredentialStore,
    OverrideCredentialStore,
    SQLiteCredentialStore,
)
from vtguard.storage.database import close_db, get_db, init_db
from vtguard.storage.history import ResultStore
from vtguard.storage.memory import MemoryListStore
from vtguard.storage.migrations import get_current_version, run_migrations
from vtguard.storage.sqlite_backend import SQLiteListStore

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def db():
    """In-memory database with all migrations applied."""
    import vtguard.storage.database as db_mod

    db_mod._db = None
    conn = await init_db(":memory:")
    yield conn
    await close_db()


class TestDatabase:
    async def test_get_db_before_init_raises(self) -> None:
        import vtguard.storage.database as db_mod

        db_mod._db = None
        with pytest.raises(PersistenceError):
            await get_db()

    async def test_init_is_idempotent(self, db: aiosqlite.Connection) -> None:
        assert await init_db(":memory:") is db
        assert await get_db() is db

    async def test_migrations_applied_once(self, db: aiosqlite.Connection) -> None:
        assert await get_current_version(db) == 2
        assert await run_migrations(db) == []

    async def test_tables_exist(self, db: aiosqlite.Connection) -> None:
        cursor = await db.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
        )
        names = {row[0] for row in await cursor.fetchall()}
        assert {"kv_lists", "credentials", "schema_migrations"} <= names

    async def test_unwritable_path_raises_persistence_error(self, tmp_path) -> None:
        import vtguard.storage.database as db_mod

        db_mod._db = None
        with pytest.raises(PersistenceError):
            await init_db(tmp_path / "missing-dir" / "vtguard.db")
        assert db_mod._db is None


class TestSQLiteListStore:
    async def test_missing_key_returns_none(self, db: aiosqlite.Connection) -> None:
        assert await SQLiteListStore(db).get_list("nothing") is None

    async def test_set_and_get_preserves_order(self, db: aiosqlite.Connection) -> None:
        store = SQLiteListStore(db)
        await store.set_list("k", ["c", "a", "b"])
        assert await store.get_list("k") == ["c", "a", "b"]

    async def test_set_replaces_whole_list(self, db: aiosqlite.Connection) -> None:
        store = SQLiteListStore(db)
        await store.set_list("k", ["1", "2", "3"])
        await store.set_list("k", ["only"])
        assert await store.get_list("k") == ["only"]

    async def test_keys_are_independent(self, db: aiosqlite.Connection) -> None:
        store = SQLiteListStore(db)
        await store.set_list("a", ["x"])
        await store.set_list("b", ["y", "z"])
        assert await store.get_list("a") == ["x"]
        assert await store.get_list("b") == ["y", "z"]

    async def test_survives_reconnect(self, tmp_path) -> None:
        import vtguard.storage.database as db_mod

        path = tmp_path / "vtguard.db"
        db_mod._db = None
        conn = await init_db(path)
        await SQLiteListStore(conn).set_list("k", ["persisted"])
        await close_db()

        conn = await init_db(path)
        try:
            assert await SQLiteListStore(conn).get_list("k") == ["persisted"]
        finally:
            await close_db()


class TestMemoryListStore:
    async def test_returns_copies(self) -> None:
        store = MemoryListStore({"k": ["a"]})
        values = await store.get_list("k")
        values.append("b")
        assert await store.get_list("k") == ["a"]


class TestCredentialStores:
    async def test_sqlite_read_write_delete(self, db: aiosqlite.Connection) -> None:
        store = SQLiteCredentialStore(db)
        assert await store.read(API_KEY_NAME) is None
        await store.write(API_KEY_NAME, "first")
        await store.write(API_KEY_NAME, "second")
        assert await store.read(API_KEY_NAME) == "second"
        assert await store.delete(API_KEY_NAME) is True
        assert await store.delete(API_KEY_NAME) is False
        assert await store.read(API_KEY_NAME) is None

    async def test_memory_store(self) -> None:
        store = MemoryCredentialStore()
        await store.write("k", "v")
        assert await store.read("k") == "v"
        assert await store.delete("k") is True
        assert await store.read("k") is None

    async def test_override_takes_precedence(self) -> None:
        inner = MemoryCredentialStore({API_KEY_NAME: "stored"})
        store = OverrideCredentialStore(inner, {API_KEY_NAME: "from-env"})
        assert await store.read(API_KEY_NAME) == "from-env"

    async def test_empty_override_falls_through(self) -> None:
        inner = MemoryCredentialStore({API_KEY_NAME: "stored"})
        store = OverrideCredentialStore(inner, {API_KEY_NAME: ""})
        assert await store.read(API_KEY_NAME) == "stored"
        await store.write(API_KEY_NAME, "new")
        assert await inner.read(API_KEY_NAME) == "new"


# ---------------------------------------------------------------------------
# Concurrent writers on one connection
# ---------------------------------------------------------------------------


class TestConcurrentWrites:
    async def test_concurrent_set_list_calls_all_commit(self, db: aiosqlite.Connection) -> None:
        store = SQLiteListStore(db)

        await asyncio.gather(
            store.set_list("history", ["a", "seed"]),
            store.set_list("history", ["b", "a", "seed"]),
            store.set_list("other", ["x"]),
        )

        assert await store.get_list("history") == ["b", "a", "seed"]
        assert await store.get_list("other") == ["x"]

    async def test_concurrent_history_appends_are_all_persisted(self, tmp_path) -> None:
        conn = await init_db(tmp_path / "concurrent.db")
        try:
            history = ResultStore(SQLiteListStore(conn))
            await history.append(make_record(file_name="seed"))

            results = await asyncio.gather(
                history.append(make_record(file_name="a")),
                history.append(make_record(file_name="b")),
                return_exceptions=True,
            )

            assert results == [None, None]
            reloaded = ResultStore(SQLiteListStore(conn))
            names = [r.file_name for r in await reloaded.load()]
            assert names == [r.file_name for r in history.history]
            assert sorted(names) == ["a", "b", "seed"]
        finally:
            await close_db()

    async def test_credential_write_during_history_write(self, db: aiosqlite.Connection) -> None:
        lists = SQLiteListStore(db)
        credentials = SQLiteCredentialStore(db)

        await asyncio.gather(
            lists.set_list("history", ["a", "b"]),
            credentials.write(API_KEY_NAME, "k"),
            lists.set_list("history", ["c", "a", "b"]),
        )

        assert await lists.get_list("history") == ["c", "a", "b"]
        assert await credentials.read(API_KEY_NAME) == "k"
