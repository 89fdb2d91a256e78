"""Credit card commands."""

import click
from finchat.cli.error_handling import handle_domain_error, require_owner
from finchat.domain.errors import StoreError
from finchat.utils.amount_parser import parse_amount


@click.group()
def card_group():
    """Manage credit cards."""
    pass


@card_group.command("create")
@click.argument("name")
@click.option("--brand", required=True, help="Card brand (e.g., Visa, Mastercard)")
@click.option("--limit", "credit_limit", default="0", help="Credit limit")
@click.option("--closing-day", type=click.IntRange(1, 31), default=1, help="Statement closing day")
@click.option("--due-day", type=click.IntRange(1, 31), default=10, help="Payment due day")
@click.pass_context
def create_card(ctx, name: str, brand: str, credit_limit: str, closing_day: int, due_day: int):
    """Create a credit card that transactions can be charged to."""
    owner_id = require_owner(ctx)
    store = ctx.obj["store"]

    try:
        limit = parse_amount(credit_limit)
    except ValueError as e:
        click.echo(f"Error: Invalid limit: {e}", err=True)
        ctx.exit(1)

    try:
        card_id = store.create_card(
            owner_id=owner_id,
            name=name,
            brand=brand,
            credit_limit=limit,
            closing_day=closing_day,
            due_day=due_day,
        )
    except StoreError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created card '{name}' (ID: {card_id})")


def register_commands(cli):
    """Register card commands with main CLI."""
    cli.add_command(card_group, name="card")
