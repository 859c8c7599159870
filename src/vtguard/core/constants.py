# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Enumerations, storage keys, and timing constants."""

from datetime import timedelta
from enum import StrEnum


class ScanStatus(StrEnum):
    CLEAN = "clean"
    THREAT_DETECTED = "threat_detected"
    SCAN_FAILED = "scan_failed"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS: dict[ScanStatus, str] = {
    ScanStatus.CLEAN: "Clean",
    ScanStatus.THREAT_DETECTED: "Threat Detected",
    ScanStatus.SCAN_FAILED: "Scan Failed",
}


class ScanState(StrEnum):
    IDLE = "idle"
    HASHING = "hashing"
    CACHE_CHECK = "cache_check"
    CACHE_HIT = "cache_hit"
    CACHE_MISS = "cache_miss"
    SUBMITTING = "submitting"
    WAITING = "waiting"
    POLLING = "polling"
    DONE = "done"
    FAILED = "failed"


# Storage keys
API_KEY_NAME = "virustotal_api_key"
HISTORY_KEY = "scan_results"

# Pipeline timing
CACHE_MAX_AGE = timedelta(days=7)
POLL_DELAY_SECONDS = 30.0
AUTO_SCAN_INTERVAL = timedelta(hours=24)

CLEAN_DETAILS = "The file is clean."
CLEAN_MESSAGE = "The file is secure."
