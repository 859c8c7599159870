# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Factory to build the notifier chain from application settings."""

from __future__ import annotations

import logging

from vtguard.core.config import Settings
from vtguard.notifications.base import CompositeNotifier, LogNotifier
from vtguard.notifications.console import ConsoleNotifier
from vtguard.notifications.webhook import WebhookNotifier

logger = logging.getLogger("vtguard.notifications.factory")


def build_notifier(settings: Settings) -> CompositeNotifier:
    """Create a :class:`CompositeNotifier` from ``settings.notification_channels``.

    Unknown channel names are skipped with a warning, as is ``webhook``
    when no ``webhook_url`` is set.
    """
    composite = CompositeNotifier()
    for ch_name in settings.notification_channels:
        if ch_name == "log":
            composite.register(LogNotifier())
        elif ch_name == "console":
            composite.register(ConsoleNotifier())
        elif ch_name == "webhook":
            webhook = WebhookNotifier(settings.webhook_url)
            if webhook.is_configured():
                composite.register(webhook)
            else:
                logger.warning("Webhook channel requested but VTGUARD_WEBHOOK_URL is empty")
        else:
            logger.warning("Unknown notification channel: %s", ch_name)
    return composite
