# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan history with cache lookup by content digest.

The :class:`ResultStore` is the only owner of the history.  It keeps the
records newest-first in memory, mirrors every change to a
:class:`~vtguard.storage.backend.ListStore` as one JSON object per record,
and answers "do we already have a fresh verdict for this digest?" queries.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import UTC, datetime, timedelta

from pydantic import ValidationError

from vtguard.core.constants import CACHE_MAX_AGE, HISTORY_KEY, ScanStatus
from vtguard.core.exceptions import PersistenceError
from vtguard.models.record import ScanRecord
from vtguard.storage.backend import ListStore

logger = logging.getLogger("vtguard.storage.history")


class ResultStore:
    """Durable, newest-first history of :class:`ScanRecord` entries.

    Args:
        backend: The list store the history is persisted to.
        key: Key the serialised history lives under.
    """

    def __init__(self, backend: ListStore, key: str = HISTORY_KEY) -> None:
        self._backend = backend
        self._key = key
        self._records: list[ScanRecord] = []
        self._write_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    async def load(self) -> list[ScanRecord]:
        """Replace the in-memory history with the persisted one.

        Entries that fail to decode are dropped with a warning; the
        remaining records keep their stored order.
        """
        raw_entries = await self._backend.get_list(self._key) or []
        records: list[ScanRecord] = []
        dropped = 0
        for position, raw in enumerate(raw_entries):
            try:
                records.append(ScanRecord.from_json(raw))
            except ValidationError as exc:
                dropped += 1
                logger.warning(
                    "Dropping undecodable history entry #%d (%d validation errors)",
                    position,
                    exc.error_count(),
                )
        self._records = records
        logger.info(
            "Loaded %d history records (%d dropped)", len(records), dropped
        )
        return list(records)

    async def append(self, record: ScanRecord) -> None:
        """Insert *record* at the head and persist the full history.

        The record is added to the in-memory history before the write, so
        it survives a :class:`PersistenceError` for the rest of the session.
        Concurrent appends are written one at a time, each snapshot taken
        under the lock, so the last write always holds every record.
        """
        self._records.insert(0, record)
        async with self._write_lock:
            payload = [r.to_json() for r in self._records]
            try:
                await self._backend.set_list(self._key, payload)
            except PersistenceError:
                raise
            except Exception as exc:
                raise PersistenceError(f"Failed to save scan history: {exc}") from exc

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_fresh_by_hash(
        self,
        file_hash: str,
        max_age: timedelta = CACHE_MAX_AGE,
        now: datetime | None = None,
    ) -> ScanRecord | None:
        """Return the most recent usable record for *file_hash*, if fresh.

        Failed attempts are never returned, and an empty digest never
        matches.  The history is walked from the head, so the newest
        match wins.
        """
        if not file_hash:
            return None
        reference = now or datetime.now(UTC)
        for record in self._records:
            if record.file_hash != file_hash:
                continue
            if record.status == ScanStatus.SCAN_FAILED:
                continue
            if reference - record.timestamp <= max_age:
                return record
        return None

    @property
    def history(self) -> list[ScanRecord]:
        """Return a copy of the history, newest first."""
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)
