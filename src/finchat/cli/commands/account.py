"""Account management commands."""

import click
from finchat.cli.error_handling import handle_domain_error, require_owner
from finchat.domain.entities import AccountType
from finchat.domain.errors import StoreError
from finchat.utils.amount_parser import format_brl, parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    default=AccountType.CHECKING.value,
    help="Account type (default: checking)",
)
@click.option("--balance", default="0", help="Initial balance (e.g., 1500.00)")
@click.pass_context
def create_account(ctx, name: str, account_type: str, balance: str):
    """Create a new account.

    Examples:
        finchat --owner alice account create "Nubank"
        finchat --owner alice account create "Carteira" --type wallet --balance 200
    """
    owner_id = require_owner(ctx)
    store = ctx.obj["store"]

    try:
        initial_balance = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid balance: {e}", err=True)
        ctx.exit(1)

    try:
        account_id = store.create_account(
            owner_id=owner_id,
            name=name,
            account_type=AccountType(account_type.lower()),
            initial_balance=initial_balance,
        )
    except StoreError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{name}' (ID: {account_id})")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List active accounts, newest first (the first one receives chat transactions)."""
    owner_id = require_owner(ctx)
    store = ctx.obj["store"]

    accounts = store.list_accounts(owner_id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type.value:8s} | {format_brl(acc.balance)}"
        )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
