# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""vtguard - VirusTotal-backed file scanning with a local result history."""

__version__ = "0.1.0"

from vtguard.core.constants import ScanStatus
from vtguard.models.record import ScanRecord, Verdict
from vtguard.sdk import build_orchestrator, scan_file, scan_file_sync

__all__ = [
    "ScanRecord",
    "ScanStatus",
    "Verdict",
    "__version__",
    "build_orchestrator",
    "scan_file",
    "scan_file_sync",
]
