# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Abstract key -> list-of-strings store used to persist the history."""

from __future__ import annotations

import abc


class ListStore(abc.ABC):
    """Persist ordered lists of strings under string keys.

    A ``set_list`` call replaces the whole list atomically: readers see
    either the previous list or the new one, never a mix.
    """

    @abc.abstractmethod
    async def get_list(self, key: str) -> list[str] | None:
        """Return the list stored under *key*, or ``None`` if absent."""

    @abc.abstractmethod
    async def set_list(self, key: str, values: list[str]) -> None:
        """Replace the list stored under *key* with *values*."""

    @abc.abstractmethod
    async def close(self) -> None:
        """Release any resources held by the store."""
