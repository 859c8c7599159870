# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Per-invocation scan state carried through the orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from vtguard.core.constants import ScanState
from vtguard.core.exceptions import ScanError

logger = logging.getLogger("vtguard.scanner.attempt")

TRANSITIONS: dict[ScanState, frozenset[ScanState]] = {
    ScanState.IDLE: frozenset({ScanState.HASHING, ScanState.FAILED}),
    ScanState.HASHING: frozenset({ScanState.CACHE_CHECK, ScanState.FAILED}),
    ScanState.CACHE_CHECK: frozenset(
        {ScanState.CACHE_HIT, ScanState.CACHE_MISS, ScanState.FAILED}
    ),
    ScanState.CACHE_HIT: frozenset({ScanState.DONE, ScanState.FAILED}),
    ScanState.CACHE_MISS: frozenset({ScanState.SUBMITTING, ScanState.FAILED}),
    ScanState.SUBMITTING: frozenset({ScanState.WAITING, ScanState.FAILED}),
    ScanState.WAITING: frozenset({ScanState.POLLING, ScanState.FAILED}),
    # POLLING -> WAITING only happens when the poll policy allows retries
    ScanState.POLLING: frozenset(
        {ScanState.DONE, ScanState.WAITING, ScanState.FAILED}
    ),
    ScanState.DONE: frozenset(),
    ScanState.FAILED: frozenset(),
}


@dataclass
class ScanAttempt:
    """Mutable record of one ``scan()`` invocation.

    Tracks the pipeline state, refusing transitions the state machine
    does not allow, and keeps the digest once it is known.
    """

    file_path: Path
    file_name: str
    state: ScanState = ScanState.IDLE
    file_hash: str = ""
    trail: list[ScanState] = field(default_factory=lambda: [ScanState.IDLE])

    def advance(self, target: ScanState) -> None:
        if target not in TRANSITIONS[self.state]:
            raise ScanError(
                f"Illegal scan transition {self.state} -> {target} for {self.file_name}"
            )
        logger.debug("%s: %s -> %s", self.file_name, self.state, target)
        self.state = target
        self.trail.append(target)
