# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shared test fixtures and fakes."""

from __future__ import annotations

import hashlib
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from vtguard.core.config import Settings
from vtguard.core.constants import API_KEY_NAME, ScanStatus
from vtguard.credentials.store import MemoryCredentialStore
from vtguard.models.record import ScanRecord, Verdict
from vtguard.notifications.base import Notifier
from vtguard.scanner.orchestrator import ScanOrchestrator
from vtguard.storage.history import ResultStore
from vtguard.storage.memory import MemoryListStore

API_KEY = "a" * 64
T0 = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def md5_of(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def make_record(**overrides) -> ScanRecord:
    """Create a ScanRecord with sensible defaults, accepting overrides."""
    defaults = {
        "file_name": "sample.bin",
        "status": ScanStatus.CLEAN,
        "details": "The file is clean.",
        "timestamp": T0,
        "file_hash": md5_of(b"sample"),
    }
    defaults.update(overrides)
    return ScanRecord(**defaults)


class FakeNotifier(Notifier):
    """Collects notifications instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "fake"

    async def notify(self, title: str, message: str) -> None:
        self.sent.append((title, message))


class FakeClient:
    """Stands in for VirusTotalClient; scripted per-call responses."""

    def __init__(
        self,
        verdicts: list[Verdict | Exception] | None = None,
        submit_error: Exception | None = None,
    ) -> None:
        self._verdicts = list(verdicts or [Verdict(positives=0, total=70)])
        self._submit_error = submit_error
        self.submitted: list[tuple[Path, str]] = []
        self.fetched: list[tuple[str, str]] = []

    @property
    def call_count(self) -> int:
        return len(self.submitted) + len(self.fetched)

    async def submit(self, file_path, api_key: str) -> str | None:
        self.submitted.append((Path(file_path), api_key))
        if self._submit_error is not None:
            raise self._submit_error
        return "scan-id-1"

    async def fetch_report(self, file_hash: str, api_key: str) -> Verdict:
        self.fetched.append((file_hash, api_key))
        outcome = self._verdicts.pop(0) if len(self._verdicts) > 1 else self._verdicts[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeClock:
    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class FakeSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, notification_channels=[], api_key="")


@pytest.fixture
def list_store() -> MemoryListStore:
    return MemoryListStore()


@pytest.fixture
def history(list_store: MemoryListStore) -> ResultStore:
    return ResultStore(list_store)


@pytest.fixture
def credentials() -> MemoryCredentialStore:
    return MemoryCredentialStore({API_KEY_NAME: API_KEY})


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def orchestrator(history, client, credentials, notifier, settings, sleep, clock) -> ScanOrchestrator:
    return ScanOrchestrator(
        history,
        client,
        credentials,
        notifier,
        settings,
        sleep=sleep,
        clock=clock,
    )


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "installer.exe"
    path.write_bytes(b"MZ\x90\x00 not really a PE file")
    return path
