# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Webhook notifier for custom HTTP POST endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import httpx

from vtguard.notifications.base import Notifier

logger = logging.getLogger("vtguard.notifications.webhook")

_TIMEOUT_SECONDS = 10.0


class WebhookNotifier(Notifier):
    """POST ``{title, message, timestamp}`` as JSON to a URL."""

    def __init__(self, url: str, *, headers: dict[str, str] | None = None) -> None:
        self._url = url
        self._extra_headers = headers or {}

    @property
    def name(self) -> str:
        return "webhook"

    def is_configured(self) -> bool:
        return bool(self._url)

    async def notify(self, title: str, message: str) -> None:
        if not self._url:
            logger.warning("Webhook URL not configured")
            return

        payload = {
            "title": title,
            "message": message,
            "timestamp": datetime.now(UTC).isoformat(),
        }
        headers: dict[str, str] = {"Content-Type": "application/json"}
        headers.update(self._extra_headers)

        try:
            async with httpx.AsyncClient(timeout=_TIMEOUT_SECONDS) as client:
                response = await client.post(self._url, json=payload, headers=headers)
                response.raise_for_status()
            logger.info("Webhook notification sent to %s", self._url)
        except Exception:
            logger.exception("Failed to send webhook notification to %s", self._url)
