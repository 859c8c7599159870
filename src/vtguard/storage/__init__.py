# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Persistence layer: list-store backends and the scan history."""

from vtguard.storage.backend import ListStore
from vtguard.storage.history import ResultStore
from vtguard.storage.memory import MemoryListStore
from vtguard.storage.sqlite_backend import SQLiteListStore

__all__ = ["ListStore", "MemoryListStore", "ResultStore", "SQLiteListStore"]
