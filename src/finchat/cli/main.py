"""Main CLI entry point."""

import click
from finchat.database.factories import create_ledger_store

# Import and register all commands at module level
from finchat.cli.commands import (
    account,
    add,
    card,
    category,
    channel,
    serve,
)


@click.group()
@click.option(
    "--database-url",
    help="SQLAlchemy database URL (overrides FINCHAT_DATABASE_URL environment variable)",
    envvar="FINCHAT_DATABASE_URL",
)
@click.option(
    "--owner",
    "owner_id",
    help="Owner identifier the command acts for",
    envvar="FINCHAT_OWNER",
)
@click.pass_context
def cli(ctx, database_url: str | None, owner_id: str | None):
    """finchat - chat-driven personal finance ledger.

    Record expenses from chat messages, move money between accounts and
    split purchases into monthly installments.
    """
    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url
    ctx.obj["owner_id"] = owner_id

    # Initialize the store only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        store = create_ledger_store(database_url=database_url)
        store.connect()
        store.initialize_schema()
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
card.register_commands(cli)
channel.register_commands(cli)
add.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
