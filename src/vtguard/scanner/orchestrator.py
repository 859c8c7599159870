# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan orchestrator: hash -> cache check -> submit -> wait -> poll -> record.

Every invocation that gets past the credential check ends with exactly
one record appended to the history and exactly one notification, whether
the scan succeeded, was served from the cache, or failed.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from pathlib import Path

from vtguard.client.virustotal import VirusTotalClient
from vtguard.core.config import Settings, get_settings
from vtguard.core.constants import API_KEY_NAME, CLEAN_MESSAGE, ScanState, ScanStatus
from vtguard.core.exceptions import (
    NotConfiguredError,
    NotFoundError,
    PersistenceError,
    RateLimitedError,
    VtguardError,
)
from vtguard.credentials.store import CredentialStore
from vtguard.hashing.digest import compute_file_digest
from vtguard.models.record import ScanRecord, Verdict
from vtguard.notifications.base import LogNotifier, Notifier
from vtguard.scanner.attempt import ScanAttempt
from vtguard.storage.history import ResultStore

logger = logging.getLogger("vtguard.scanner.orchestrator")

SleepFunc = Callable[[float], Awaitable[None]]
Clock = Callable[[], datetime]

_FAILURE_TITLE = "Scan Error"


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class _Outcome:
    """Everything needed to build the final record and notification."""

    status: ScanStatus
    details: str
    file_hash: str
    title: str
    message: str
    file_name: str | None = None


class ScanOrchestrator:
    """Drive a single file through the VirusTotal scan pipeline.

    Args:
        history: Result store used for cache lookups and appends.
        client: VirusTotal protocol adapter.
        credentials: Store the API key is read from at the start of each scan.
        notifier: Sink for the outcome notification.
        settings: Timing and cache configuration.
        sleep: Awaitable used for the post-submission wait.
        clock: Source of "now" for record timestamps and cache freshness.
    """

    def __init__(
        self,
        history: ResultStore,
        client: VirusTotalClient,
        credentials: CredentialStore,
        notifier: Notifier | None = None,
        settings: Settings | None = None,
        *,
        sleep: SleepFunc = asyncio.sleep,
        clock: Clock = _utcnow,
    ) -> None:
        settings = settings or get_settings()
        self._history = history
        self._client = client
        self._credentials = credentials
        self._notifier = notifier or LogNotifier()
        self._sleep = sleep
        self._clock = clock
        self._cache_max_age = timedelta(days=settings.cache_max_age_days)
        self._poll_delay = settings.poll_delay_seconds
        self._poll_max_attempts = settings.poll_max_attempts
        self._poll_backoff_factor = settings.poll_backoff_factor

    @property
    def history(self) -> ResultStore:
        return self._history

    async def scan(self, path: str | Path, *, file_name: str | None = None) -> ScanRecord:
        """Scan the file at *path* and return the recorded outcome.

        Raises:
            NotConfiguredError: no API key is configured.  Nothing is
                recorded or notified in that case.
            PersistenceError: the credential store could not be read.
                Raised before the pipeline starts, so nothing is recorded.
        """
        api_key = await self._credentials.read(API_KEY_NAME)
        if not api_key:
            raise NotConfiguredError()

        file_path = Path(path)
        attempt = ScanAttempt(
            file_path=file_path,
            file_name=file_name or file_path.name or str(file_path),
        )
        logger.info("Scanning started: %s", attempt.file_name)

        try:
            outcome = await self._run(attempt, api_key)
        except VtguardError as exc:
            outcome = self._failure(attempt, str(exc))
        except Exception as exc:
            logger.exception("Unexpected error while scanning %s", attempt.file_name)
            outcome = self._failure(attempt, f"Unexpected error: {exc}")

        return await self._finish(attempt, outcome)

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    async def _run(self, attempt: ScanAttempt, api_key: str) -> _Outcome:
        attempt.advance(ScanState.HASHING)
        attempt.file_hash = await asyncio.to_thread(
            compute_file_digest, attempt.file_path
        )
        logger.debug("File hash for %s: %s", attempt.file_name, attempt.file_hash)

        attempt.advance(ScanState.CACHE_CHECK)
        cached = self._history.find_fresh_by_hash(
            attempt.file_hash, self._cache_max_age, now=self._clock()
        )
        if cached is not None:
            attempt.advance(ScanState.CACHE_HIT)
            logger.info(
                "Cache hit for %s (%s, recorded %s)",
                attempt.file_name,
                cached.status,
                cached.timestamp.isoformat(),
            )
            return _Outcome(
                status=cached.status,
                details=cached.details,
                file_hash=cached.file_hash,
                title=cached.status.label,
                message=f"Cached result for {cached.file_name}: {cached.details}",
                file_name=cached.file_name,
            )

        attempt.advance(ScanState.CACHE_MISS)
        attempt.advance(ScanState.SUBMITTING)
        await self._client.submit(attempt.file_path, api_key)

        verdict = await self._poll(attempt, api_key)
        if verdict.status == ScanStatus.CLEAN:
            message = CLEAN_MESSAGE
        else:
            message = f"Scan completed for {attempt.file_name}: {verdict.details}"
        return _Outcome(
            status=verdict.status,
            details=verdict.details,
            file_hash=attempt.file_hash,
            title=verdict.status.label,
            message=message,
        )

    async def _poll(self, attempt: ScanAttempt, api_key: str) -> Verdict:
        """Wait, then fetch the report; retry only if the poll policy allows."""
        delay = self._poll_delay
        poll_no = 1
        while True:
            attempt.advance(ScanState.WAITING)
            logger.info(
                "Waiting %.0fs for analysis of %s (poll %d/%d)",
                delay,
                attempt.file_name,
                poll_no,
                self._poll_max_attempts,
            )
            await self._sleep(delay)

            attempt.advance(ScanState.POLLING)
            try:
                return await self._client.fetch_report(attempt.file_hash, api_key)
            except (NotFoundError, RateLimitedError) as exc:
                if poll_no >= self._poll_max_attempts:
                    raise
                logger.info("Report for %s not ready: %s", attempt.file_name, exc)
                poll_no += 1
                delay *= self._poll_backoff_factor

    def _failure(self, attempt: ScanAttempt, error: str) -> _Outcome:
        logger.error("Scan failed for %s: %s", attempt.file_name, error)
        return _Outcome(
            status=ScanStatus.SCAN_FAILED,
            details=error,
            file_hash=attempt.file_hash,
            title=_FAILURE_TITLE,
            message=error,
        )

    # ------------------------------------------------------------------
    # Terminal step
    # ------------------------------------------------------------------

    async def _finish(self, attempt: ScanAttempt, outcome: _Outcome) -> ScanRecord:
        file_name = outcome.file_name or attempt.file_name
        # Built immediately before the append so head timestamps never go backwards
        if outcome.status == ScanStatus.SCAN_FAILED:
            attempt.advance(ScanState.FAILED)
            record = ScanRecord.failed(
                file_name,
                outcome.details,
                file_hash=outcome.file_hash,
                timestamp=self._clock(),
            )
        else:
            attempt.advance(ScanState.DONE)
            record = ScanRecord(
                file_name=file_name,
                status=outcome.status,
                details=outcome.details,
                timestamp=self._clock(),
                file_hash=outcome.file_hash,
            )

        message = outcome.message
        try:
            await self._history.append(record)
        except PersistenceError as exc:
            logger.error("Failed to persist scan result for %s: %s", record.file_name, exc)
            message = f"{message} (history not saved: {exc})"

        logger.info(
            "Scan of %s finished: status=%s details=%s",
            record.file_name,
            record.status,
            record.details,
        )
        await self._notify(outcome.title, message)
        return record

    async def _notify(self, title: str, message: str) -> None:
        try:
            await self._notifier.notify(title, message)
        except Exception:
            logger.exception("Notifier %s raised", self._notifier.name)
