# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Rich console output for scan records and history."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vtguard import __version__
from vtguard.core.constants import ScanStatus
from vtguard.models.record import ScanRecord

console = Console()

STATUS_COLORS = {
    ScanStatus.CLEAN: "bold green",
    ScanStatus.THREAT_DETECTED: "bold red",
    ScanStatus.SCAN_FAILED: "yellow",
}


def format_timestamp(record: ScanRecord) -> str:
    return record.timestamp.strftime("%Y-%m-%d %H:%M:%S UTC")


def format_scan_record(record: ScanRecord) -> None:
    """Print one scan record with Rich formatting."""
    console.print()
    console.print(f"[bold]vtguard v{__version__}[/bold] - VirusTotal file scanner")
    console.print()

    info_table = Table(show_header=False, box=None, padding=(0, 2))
    info_table.add_column("key", style="dim")
    info_table.add_column("value")
    info_table.add_row("File:", escape(record.file_name))
    info_table.add_row("MD5:", record.file_hash or "N/A")
    info_table.add_row("Scanned:", format_timestamp(record))
    console.print(info_table)
    console.print()

    color = STATUS_COLORS.get(record.status, "white")
    console.print(
        Panel(
            f"[{color}]{record.status.label.upper()}[/{color}]  {escape(record.details)}",
            style=color,
        )
    )


def format_history(records: list[ScanRecord]) -> None:
    """Print the history as a table, newest first."""
    if not records:
        console.print("No scan results yet.")
        return

    table = Table(title="Scan History")
    table.add_column("Scanned", style="dim")
    table.add_column("File", style="bold")
    table.add_column("Status")
    table.add_column("Details")
    table.add_column("MD5", style="dim")

    for record in records:
        color = STATUS_COLORS.get(record.status, "white")
        table.add_row(
            format_timestamp(record),
            escape(record.file_name),
            f"[{color}]{record.status.label}[/{color}]",
            escape(record.details),
            record.file_hash or "-",
        )
    console.print(table)
