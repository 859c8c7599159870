# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Streaming content digests used as cache and lookup keys."""

from vtguard.hashing.digest import compute_digest, compute_file_digest

__all__ = ["compute_digest", "compute_file_digest"]
