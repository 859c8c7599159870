# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Public SDK interface for embedding vtguard in other tools.

Usage::

    from vtguard import scan_file, scan_file_sync

    # Synchronous (blocking)
    record = scan_file_sync("installer.exe")
    print(record.status, record.details)

    # Async, reusing one orchestrator for several scans
    async with build_orchestrator() as orchestrator:
        record = await orchestrator.scan("installer.exe")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from vtguard.client.virustotal import VirusTotalClient
from vtguard.core.config import Settings, get_settings
from vtguard.core.constants import API_KEY_NAME
from vtguard.credentials.store import OverrideCredentialStore, SQLiteCredentialStore
from vtguard.models.record import ScanRecord
from vtguard.notifications.base import Notifier
from vtguard.notifications.factory import build_notifier
from vtguard.scanner.orchestrator import ScanOrchestrator
from vtguard.storage.database import close_db, init_db
from vtguard.storage.history import ResultStore
from vtguard.storage.sqlite_backend import SQLiteListStore

logger = logging.getLogger("vtguard.sdk")


@asynccontextmanager
async def build_orchestrator(
    settings: Settings | None = None,
    *,
    notifier: Notifier | None = None,
) -> AsyncIterator[ScanOrchestrator]:
    """Open the database, load the history, and yield a wired orchestrator.

    Parameters
    ----------
    settings:
        Optional ``Settings`` override; falls back to ``get_settings()``.
    notifier:
        Optional notifier; defaults to the channels named in
        ``settings.notification_channels``.
    """
    settings = settings or get_settings()
    db = await init_db(settings.db_path)
    try:
        history = ResultStore(SQLiteListStore(db))
        await history.load()
        credentials = OverrideCredentialStore(
            SQLiteCredentialStore(db),
            {API_KEY_NAME: settings.api_key},
        )
        client = VirusTotalClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout,
        )
        yield ScanOrchestrator(
            history,
            client,
            credentials,
            notifier or build_notifier(settings),
            settings,
        )
    finally:
        await close_db()


async def scan_file(
    path: str | Path,
    *,
    settings: Settings | None = None,
    notifier: Notifier | None = None,
) -> ScanRecord:
    """Scan a single file and return the recorded outcome.

    Raises :class:`~vtguard.core.exceptions.NotConfiguredError` when no
    API key is available.
    """
    async with build_orchestrator(settings, notifier=notifier) as orchestrator:
        return await orchestrator.scan(path)


def scan_file_sync(
    path: str | Path,
    *,
    settings: Settings | None = None,
    notifier: Notifier | None = None,
) -> ScanRecord:
    """Synchronous wrapper around :func:`scan_file`."""
    return asyncio.run(scan_file(path, settings=settings, notifier=notifier))
