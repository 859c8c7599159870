# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Scan history CLI command."""

from __future__ import annotations

import asyncio
import json
from typing import Annotated

import typer


def history_command(
    limit: Annotated[
        int, typer.Option("--limit", "-n", min=1, help="Maximum records to show")
    ] = 20,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print records as a JSON array")
    ] = False,
) -> None:
    """Show past scan results, newest first."""
    asyncio.run(_async_history(limit, as_json))


async def _async_history(limit: int, as_json: bool) -> None:
    from vtguard.core.config import get_settings
    from vtguard.storage.database import close_db, init_db
    from vtguard.storage.history import ResultStore
    from vtguard.storage.sqlite_backend import SQLiteListStore

    settings = get_settings()
    db = await init_db(settings.db_path)

    try:
        store = ResultStore(SQLiteListStore(db))
        records = (await store.load())[:limit]
    finally:
        await close_db()

    if as_json:
        data = [json.loads(r.to_json()) for r in records]
        typer.echo(json.dumps(data, indent=2))
        return

    from vtguard.cli.formatters.console import format_history

    format_history(records)
