# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""AutoScanScheduler: rescans configured targets on a fixed interval.

Uses pure asyncio.  The scheduler only calls
:meth:`ScanOrchestrator.scan`; it holds no pipeline state of its own.
Stopping interrupts the wait between passes but never a scan: a pass that
is already running finishes its current target, records it, and then
ends early.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import timedelta
from pathlib import Path

from vtguard.core.constants import AUTO_SCAN_INTERVAL
from vtguard.core.exceptions import NotConfiguredError
from vtguard.models.record import ScanRecord
from vtguard.scanner.orchestrator import ScanOrchestrator

logger = logging.getLogger("vtguard.scheduler.engine")


class AutoScanScheduler:
    """Periodic trigger that scans every target once per interval.

    The first run happens one full interval after :meth:`start`.
    """

    def __init__(
        self,
        orchestrator: ScanOrchestrator,
        targets: list[str | Path],
        *,
        interval: timedelta = AUTO_SCAN_INTERVAL,
    ) -> None:
        if interval.total_seconds() <= 0:
            raise ValueError("interval must be positive")
        self._orchestrator = orchestrator
        self._targets = [Path(t) for t in targets]
        self._interval = interval
        self._task: asyncio.Task[None] | None = None
        self._pass: asyncio.Task[list[ScanRecord]] | None = None
        self._running = False
        self._stopping = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def targets(self) -> list[Path]:
        return list(self._targets)

    async def start(self, *, immediate: bool = False) -> None:
        """Start the background loop.

        With *immediate*, the first pass runs right away instead of one
        interval after the start.
        """
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._loop(immediate))
        logger.info(
            "Auto-scan started for %d target(s) (interval=%s)",
            len(self._targets),
            self._interval,
        )

    async def stop(self) -> None:
        """Stop the loop and wait for a running pass to record its scan."""
        self._running = False
        self._stopping = True
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        if self._pass is not None:
            if not self._pass.done():
                logger.info("Waiting for the running auto-scan pass to finish")
            try:
                await self._pass
            except Exception:
                logger.exception("Auto-scan pass failed")
            self._pass = None
        self._stopping = False
        logger.info("Auto-scan stopped")

    async def _loop(self, immediate: bool) -> None:
        if not immediate:
            await asyncio.sleep(self._interval.total_seconds())
        while self._running:
            # the pass outlives cancellation of the loop; stop() awaits it
            self._pass = asyncio.ensure_future(self.run_once())
            try:
                await asyncio.shield(self._pass)
            except Exception:
                logger.exception("Auto-scan tick failed")
            self._pass = None
            await asyncio.sleep(self._interval.total_seconds())

    async def run_once(self) -> list[ScanRecord]:
        """Scan every target once, sequentially, and return the records."""
        records: list[ScanRecord] = []
        for target in self._targets:
            if self._stopping:
                logger.info("Auto-scan stopping; skipping remaining targets")
                break
            try:
                record = await self._orchestrator.scan(target)
            except NotConfiguredError:
                logger.warning("Auto-scan skipped: no API key configured")
                break
            records.append(record)
            logger.info("Auto-scan of %s: %s", target, record.status)
        return records
