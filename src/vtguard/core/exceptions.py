# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Custom exception hierarchy for vtguard."""

from __future__ import annotations


class VtguardError(Exception):
    """Base exception for all vtguard errors."""


class ConfigurationError(VtguardError):
    """Invalid or missing configuration."""


class NotConfiguredError(ConfigurationError):
    """No VirusTotal API key has been configured."""

    def __init__(self, message: str = "No VirusTotal API key configured") -> None:
        super().__init__(message)


class FileAccessError(VtguardError):
    """A local file could not be opened or fully read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class RemoteServiceError(VtguardError):
    """Base error for unsuccessful responses from the reputation service."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SubmissionError(RemoteServiceError):
    """File submission was rejected with a non-success HTTP status."""


class NotFoundError(RemoteServiceError):
    """The service has no report for the resource (unknown or not analysed yet)."""

    def __init__(
        self,
        message: str,
        resource: str,
        status_code: int | None = 200,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.resource = resource


class RateLimitedError(RemoteServiceError):
    """The service throttled the request."""


class ProtocolError(RemoteServiceError):
    """Unexpected status code or malformed response body."""


class NetworkError(VtguardError):
    """Transport-level failure talking to the reputation service."""


class PersistenceError(VtguardError):
    """Reading or writing the scan history failed."""


class ScanError(VtguardError):
    """Illegal state transition inside the scan pipeline."""
