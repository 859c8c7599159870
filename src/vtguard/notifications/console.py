# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console notifier."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text

from vtguard.notifications.base import Notifier

_TITLE_STYLES = {
    "Clean": "bold green",
    "Threat Detected": "bold red",
    "Scan Error": "bold yellow",
}


class ConsoleNotifier(Notifier):
    """Print each notification as a Rich panel on stderr."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    @property
    def name(self) -> str:
        return "console"

    async def notify(self, title: str, message: str) -> None:
        style = _TITLE_STYLES.get(title, "bold cyan")
        self._console.print(
            Panel(
                Text(message),
                title=f"[{style}]{escape(title)}[/{style}]",
                expand=False,
            )
        )
