# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""In-memory list store, used by tests and ephemeral sessions."""

from __future__ import annotations

from vtguard.storage.backend import ListStore


class MemoryListStore(ListStore):
    """Dictionary-backed :class:`ListStore`; contents vanish with the process."""

    def __init__(self, initial: dict[str, list[str]] | None = None) -> None:
        self._store: dict[str, list[str]] = {
            key: list(values) for key, values in (initial or {}).items()
        }

    async def get_list(self, key: str) -> list[str] | None:
        values = self._store.get(key)
        return list(values) if values is not None else None

    async def set_list(self, key: str, values: list[str]) -> None:
        self._store[key] = list(values)

    async def close(self) -> None:
        self._store.clear()
