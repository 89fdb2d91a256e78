"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click
from finchat.database.base import LedgerStore
from finchat.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, store: LedgerStore, owner_id: str, account: str | int
) -> int:
    """Resolve account name or ID, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(store, owner_id, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
