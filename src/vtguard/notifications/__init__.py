# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Best-effort notification sinks for scan outcomes."""

from vtguard.notifications.base import CompositeNotifier, LogNotifier, Notifier
from vtguard.notifications.console import ConsoleNotifier
from vtguard.notifications.factory import build_notifier
from vtguard.notifications.webhook import WebhookNotifier

__all__ = [
    "CompositeNotifier",
    "ConsoleNotifier",
    "LogNotifier",
    "Notifier",
    "WebhookNotifier",
    "build_notifier",
]
