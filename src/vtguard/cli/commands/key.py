# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""CLI commands for managing the stored VirusTotal API key."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer

app = typer.Typer()

_NOT_CONFIGURED = 2


def _mask(value: str) -> str:
    if len(value) <= 8:
        return "*" * len(value)
    return f"{value[:4]}{'*' * (len(value) - 8)}{value[-4:]}"


@app.command(name="set")
def key_set(
    api_key: Annotated[
        str,
        typer.Option(
            "--api-key",
            prompt="VirusTotal API key",
            hide_input=True,
            help="API key to store",
        ),
    ],
) -> None:
    """Store the VirusTotal API key."""
    value = api_key.strip()
    if not value:
        typer.echo("API key must not be empty.", err=True)
        raise typer.Exit(1)
    asyncio.run(_async_key_set(value))
    typer.echo("API key saved.")


async def _async_key_set(value: str) -> None:
    from vtguard.core.config import get_settings
    from vtguard.core.constants import API_KEY_NAME
    from vtguard.credentials.store import SQLiteCredentialStore
    from vtguard.storage.database import close_db, init_db

    settings = get_settings()
    db = await init_db(settings.db_path)
    try:
        await SQLiteCredentialStore(db).write(API_KEY_NAME, value)
    finally:
        await close_db()


@app.command(name="status")
def key_status() -> None:
    """Show whether an API key is configured, and where it comes from."""
    asyncio.run(_async_key_status())


async def _async_key_status() -> None:
    from vtguard.core.config import get_settings
    from vtguard.core.constants import API_KEY_NAME
    from vtguard.credentials.store import SQLiteCredentialStore
    from vtguard.storage.database import close_db, init_db

    settings = get_settings()
    if settings.api_key:
        typer.echo(f"API key from VTGUARD_API_KEY: {_mask(settings.api_key)}")
        return

    db = await init_db(settings.db_path)
    try:
        stored = await SQLiteCredentialStore(db).read(API_KEY_NAME)
    finally:
        await close_db()

    if stored:
        typer.echo(f"API key stored: {_mask(stored)}")
    else:
        typer.echo("No API key configured. Run 'vtguard key set'.")
        raise typer.Exit(_NOT_CONFIGURED)


@app.command(name="clear")
def key_clear() -> None:
    """Remove the stored API key."""
    removed = asyncio.run(_async_key_clear())
    typer.echo("API key removed." if removed else "No API key was stored.")


async def _async_key_clear() -> bool:
    from vtguard.core.config import get_settings
    from vtguard.core.constants import API_KEY_NAME
    from vtguard.credentials.store import SQLiteCredentialStore
    from vtguard.storage.database import close_db, init_db

    settings = get_settings()
    db = await init_db(settings.db_path)
    try:
        return await SQLiteCredentialStore(db).delete(API_KEY_NAME)
    finally:
        await close_db()
