# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Notifier interface plus the logging and fan-out implementations."""

from __future__ import annotations

import abc
import logging

logger = logging.getLogger("vtguard.notifications")


class Notifier(abc.ABC):
    """Sink for user-facing ``(title, message)`` notifications.

    Delivery is fire-and-forget: implementations swallow and log their own
    failures, so ``notify`` never raises into the scan pipeline.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Human-readable notifier name (e.g. ``'console'``)."""

    @abc.abstractmethod
    async def notify(self, title: str, message: str) -> None:
        """Deliver one notification."""


class LogNotifier(Notifier):
    """Write notifications to the ``vtguard.notifications`` logger."""

    def __init__(self, level: int = logging.INFO) -> None:
        self._level = level

    @property
    def name(self) -> str:
        return "log"

    async def notify(self, title: str, message: str) -> None:
        logger.log(self._level, "%s: %s", title, message)


class CompositeNotifier(Notifier):
    """Fan a notification out to several notifiers in registration order."""

    def __init__(self, notifiers: list[Notifier] | None = None) -> None:
        self._notifiers: list[Notifier] = list(notifiers or [])

    @property
    def name(self) -> str:
        return "composite"

    @property
    def notifiers(self) -> list[Notifier]:
        return list(self._notifiers)

    def register(self, notifier: Notifier) -> None:
        self._notifiers.append(notifier)
        logger.debug("Registered notifier: %s", notifier.name)

    async def notify(self, title: str, message: str) -> None:
        for notifier in self._notifiers:
            try:
                await notifier.notify(title, message)
            except Exception:
                logger.exception("Notifier %s failed", notifier.name)
