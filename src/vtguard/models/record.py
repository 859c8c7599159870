# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan record and verdict models."""

from __future__ import annotations

import re
from datetime import UTC, datetime

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from vtguard.core.constants import CLEAN_DETAILS, ScanStatus

_MD5_HEX_RE = re.compile(r"^[0-9a-f]{32}$")


class ScanRecord(BaseModel):
    """One completed scan attempt, as stored in the history."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_name: str = Field(alias="fileName", min_length=1)
    status: ScanStatus
    details: str = ""
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    file_hash: str = Field(default="", alias="fileHash")

    @field_validator("timestamp")
    @classmethod
    def _require_aware(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            raise ValueError("timestamp must be timezone-aware")
        return v.astimezone(UTC)

    @model_validator(mode="after")
    def _check_hash(self) -> ScanRecord:
        if self.status != ScanStatus.SCAN_FAILED and not _MD5_HEX_RE.match(self.file_hash):
            raise ValueError(
                f"file_hash must be a 32-character hex digest for status {self.status}"
            )
        return self

    @classmethod
    def failed(
        cls,
        file_name: str,
        error: str,
        file_hash: str = "",
        timestamp: datetime | None = None,
    ) -> ScanRecord:
        """Build a ``scan_failed`` record carrying *error* as details."""
        return cls(
            file_name=file_name,
            status=ScanStatus.SCAN_FAILED,
            details=error,
            timestamp=timestamp or datetime.now(UTC),
            file_hash=file_hash,
        )

    def to_json(self) -> str:
        """Serialise to the persisted camelCase JSON form."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> ScanRecord:
        return cls.model_validate_json(raw)


class Verdict(BaseModel):
    """Detection counts returned by a file report."""

    positives: int = Field(default=0, ge=0)
    total: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_counts(self) -> Verdict:
        if self.positives > self.total:
            raise ValueError(
                f"positives ({self.positives}) exceeds total engines ({self.total})"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> ScanStatus:
        if self.positives > 0:
            return ScanStatus.THREAT_DETECTED
        return ScanStatus.CLEAN

    @computed_field  # type: ignore[prop-decorator]
    @property
    def details(self) -> str:
        if self.positives > 0:
            return f"{self.positives}/{self.total} detections"
        return CLEAN_DETAILS
