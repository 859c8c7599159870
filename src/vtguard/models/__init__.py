# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Domain models for scan outcomes and remote verdicts."""

from vtguard.models.record import ScanRecord, Verdict

__all__ = ["ScanRecord", "Verdict"]
