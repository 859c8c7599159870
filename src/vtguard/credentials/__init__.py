# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Credential storage for the VirusTotal API key."""

from vtguard.credentials.store import (
    CredentialStore,
    MemoryCredentialStore,
    OverrideCredentialStore,
    SQLiteCredentialStore,
)

__all__ = [
    "CredentialStore",
    "MemoryCredentialStore",
    "OverrideCredentialStore",
    "SQLiteCredentialStore",
]
