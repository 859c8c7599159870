# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""MD5 content digests computed over a byte stream.

MD5 is used for speed and because it is the resource identifier the
VirusTotal v2 report endpoint accepts.  The digest only correlates
history entries and remote reports; it is never used as a security proof.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import BinaryIO

from vtguard.core.exceptions import FileAccessError

logger = logging.getLogger("vtguard.hashing.digest")

_CHUNK_SIZE = 64 * 1024


def compute_digest(stream: BinaryIO, chunk_size: int = _CHUNK_SIZE) -> str:
    """Return the lowercase hex MD5 digest of everything left in *stream*.

    Raises:
        FileAccessError: if the stream cannot be read to the end.
    """
    digest = hashlib.md5(usedforsecurity=False)
    try:
        while chunk := stream.read(chunk_size):
            digest.update(chunk)
    except OSError as exc:
        raise FileAccessError(f"Failed to calculate file hash: {exc}") from exc
    return digest.hexdigest()


def compute_file_digest(path: str | Path, chunk_size: int = _CHUNK_SIZE) -> str:
    """Open *path* in binary mode and stream it through :func:`compute_digest`."""
    file_path = Path(path)
    try:
        with file_path.open("rb") as fh:
            digest = compute_digest(fh, chunk_size=chunk_size)
    except FileAccessError as exc:
        exc.path = str(file_path)
        raise
    except OSError as exc:
        raise FileAccessError(
            f"Failed to calculate file hash: {exc}", path=str(file_path)
        ) from exc
    logger.debug("Digest for %s: %s", file_path, digest)
    return digest
