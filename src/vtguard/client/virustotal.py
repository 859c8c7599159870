# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Async HTTP client for the VirusTotal v2 file API."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx
from pydantic import ValidationError

from vtguard import __version__
from vtguard.core.exceptions import (
    FileAccessError,
    NetworkError,
    NotFoundError,
    ProtocolError,
    RateLimitedError,
    SubmissionError,
)
from vtguard.models.record import Verdict

logger = logging.getLogger("vtguard.client.virustotal")

BASE_URL = "https://www.virustotal.com/vtapi/v2"
_TIMEOUT = 60.0
_USER_AGENT = f"vtguard/{__version__}"

# ``response_code`` values of the v2 report endpoint
_RESPONSE_NOT_FOUND = 0
_RESPONSE_QUEUED = -2


def _decode_json(resp: httpx.Response, context: str) -> dict:
    try:
        data = resp.json()
    except ValueError as exc:
        raise ProtocolError(
            f"{context}: response body is not valid JSON",
            status_code=resp.status_code,
        ) from exc
    if not isinstance(data, dict):
        raise ProtocolError(
            f"{context}: expected a JSON object, got {type(data).__name__}",
            status_code=resp.status_code,
        )
    return data


class VirusTotalClient:
    """Submit files and fetch file reports from VirusTotal.

    The client keeps no state between calls; the API key is passed to
    every operation.

    Parameters
    ----------
    base_url:
        Override the API base URL (useful for testing).
    timeout:
        HTTP timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        timeout: float = _TIMEOUT,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            headers={"User-Agent": _USER_AGENT},
        )

    async def submit(self, file_path: str | Path, api_key: str) -> str | None:
        """Upload *file_path* for analysis.

        Returns the ``scan_id`` assigned by VirusTotal, if present.

        Raises
        ------
        SubmissionError
            The service answered with a non-200 status.
        FileAccessError
            The file could not be opened for upload.
        NetworkError
            The request did not complete.
        """
        path = Path(file_path)
        try:
            fh = path.open("rb")
        except OSError as exc:
            raise FileAccessError(
                f"Failed to open {path.name} for upload: {exc}", path=str(path)
            ) from exc

        try:
            async with self._client() as client:
                resp = await client.post(
                    f"{self.base_url}/file/scan",
                    data={"apikey": api_key},
                    files={"file": (path.name, fh, "application/octet-stream")},
                )
        except httpx.HTTPError as exc:
            raise NetworkError(f"Failed to submit file: {exc}") from exc
        finally:
            fh.close()

        if resp.status_code != 200:
            raise SubmissionError(
                f"Failed to submit file to VirusTotal: {resp.status_code}",
                status_code=resp.status_code,
            )

        data = _decode_json(resp, "submit")
        scan_id = data.get("scan_id")
        logger.info("Scan submitted for %s: %s", path.name, scan_id)
        return scan_id

    async def fetch_report(self, file_hash: str, api_key: str) -> Verdict:
        """Fetch the analysis report for *file_hash*.

        Raises
        ------
        NotFoundError
            The file is unknown to VirusTotal or still queued.
        RateLimitedError
            The service returned HTTP 204.
        ProtocolError
            Any other non-200 status, or a malformed body.
        NetworkError
            The request did not complete.
        """
        try:
            async with self._client() as client:
                resp = await client.get(
                    f"{self.base_url}/file/report",
                    params={"apikey": api_key, "resource": file_hash},
                )
        except httpx.HTTPError as exc:
            raise NetworkError(f"Failed to fetch report: {exc}") from exc

        if resp.status_code == 204:
            raise RateLimitedError(
                "Exceeded API request rate limit", status_code=204
            )
        if resp.status_code != 200:
            raise ProtocolError(
                f"Failed to check file: {resp.status_code}",
                status_code=resp.status_code,
            )

        data = _decode_json(resp, "report")
        response_code = data.get("response_code")
        if response_code == _RESPONSE_NOT_FOUND:
            raise NotFoundError(
                "File not found in VirusTotal database", resource=file_hash
            )
        if response_code == _RESPONSE_QUEUED:
            raise NotFoundError(
                "File is still queued for analysis in VirusTotal",
                resource=file_hash,
            )

        try:
            verdict = Verdict(
                positives=data.get("positives") or 0,
                total=data.get("total") or 0,
            )
        except ValidationError as exc:
            raise ProtocolError(
                f"Malformed report for {file_hash}: {exc.error_count()} invalid fields",
                status_code=resp.status_code,
            ) from exc

        logger.debug(
            "Report for %s: %d/%d", file_hash, verdict.positives, verdict.total
        )
        return verdict
