# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Typer CLI application root."""

from __future__ import annotations

import asyncio
import sys
from datetime import timedelta
from pathlib import Path
from typing import Annotated

import typer

from vtguard.cli.commands import history as history_cmd
from vtguard.cli.commands import key as key_cmd
from vtguard.core.constants import ScanStatus

app = typer.Typer(
    name="vtguard",
    help="Scan files against VirusTotal and keep a local result history",
    no_args_is_help=True,
)

app.add_typer(key_cmd.app, name="key", help="Manage the VirusTotal API key")
app.command(name="history")(history_cmd.history_command)

_NOT_CONFIGURED_EXIT = 2


@app.callback()
def main() -> None:
    """Configure logging from settings before any command runs."""
    from vtguard.core.config import get_settings
    from vtguard.core.logging import setup_logging

    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)


@app.command()
def scan(
    target: Annotated[Path, typer.Argument(help="File to scan")],
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the record as JSON")
    ] = False,
) -> None:
    """Scan a file with VirusTotal, reusing results from the last 7 days."""
    if not target.is_file():
        typer.echo(f"Target not found: {target}", err=True)
        raise typer.Exit(1)

    record = asyncio.run(_async_scan(target))

    if as_json:
        sys.stdout.write(record.to_json() + "\n")
    else:
        from vtguard.cli.formatters.console import format_scan_record

        format_scan_record(record)

    if record.status == ScanStatus.SCAN_FAILED:
        raise typer.Exit(1)


async def _async_scan(target: Path):
    from vtguard.core.exceptions import NotConfiguredError
    from vtguard.sdk import build_orchestrator

    async with build_orchestrator() as orchestrator:
        try:
            return await orchestrator.scan(target)
        except NotConfiguredError as exc:
            typer.echo(f"{exc}. Run 'vtguard key set' first.", err=True)
            raise typer.Exit(_NOT_CONFIGURED_EXIT) from exc


@app.command()
def watch(
    targets: Annotated[
        list[Path] | None,
        typer.Argument(help="Files to rescan (defaults to VTGUARD_AUTO_SCAN_TARGETS)"),
    ] = None,
    interval_hours: Annotated[
        float | None,
        typer.Option("--interval-hours", help="Hours between scans"),
    ] = None,
    now: Annotated[
        bool, typer.Option("--now", help="Also scan once immediately")
    ] = False,
) -> None:
    """Rescan files periodically until interrupted."""
    from vtguard.core.config import get_settings

    settings = get_settings()
    scan_targets = [str(t) for t in targets] if targets else list(settings.auto_scan_targets)
    if not scan_targets:
        typer.echo("No targets given and VTGUARD_AUTO_SCAN_TARGETS is empty.", err=True)
        raise typer.Exit(1)

    hours = interval_hours if interval_hours is not None else settings.auto_scan_interval_hours
    if hours <= 0:
        typer.echo("--interval-hours must be positive.", err=True)
        raise typer.Exit(1)

    try:
        asyncio.run(_async_watch(scan_targets, timedelta(hours=hours), now))
    except KeyboardInterrupt:
        typer.echo("Stopped.")


async def _async_watch(targets: list[str], interval: timedelta, run_now: bool) -> None:
    from vtguard.notifications.console import ConsoleNotifier
    from vtguard.scheduler.engine import AutoScanScheduler
    from vtguard.sdk import build_orchestrator

    async with build_orchestrator(notifier=ConsoleNotifier()) as orchestrator:
        scheduler = AutoScanScheduler(orchestrator, targets, interval=interval)
        await scheduler.start(immediate=run_now)
        typer.echo(f"Watching {len(targets)} file(s) every {interval}. Press Ctrl+C to stop.")
        try:
            await asyncio.Event().wait()
        finally:
            await scheduler.stop()
