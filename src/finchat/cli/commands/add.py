"""Add transaction command."""

import click
from finchat.cli.account_resolution import resolve_account_or_exit
from finchat.cli.error_handling import handle_domain_error, require_owner
from finchat.domain.entities import OwnerContext, TransactionType
from finchat.domain.errors import DomainError, StoreError, category_not_found
from finchat.domain.intents import ExpenseDraft, TransferDraft
from finchat.domain.materializer import TransactionMaterializer
from finchat.utils.amount_parser import parse_amount
from finchat.utils.date_parser import parse_date


@click.command("add")
@click.option("--amount", required=True, help="Amount, per installment when splitting (e.g., 123.45)")
@click.option("--description", required=True, help="Transaction description")
@click.option(
    "--type",
    "transaction_type",
    type=click.Choice([t.value for t in TransactionType], case_sensitive=False),
    default=TransactionType.EXPENSE.value,
    help="Transaction type (default: expense)",
)
@click.option("--account", help="Account name or ID (defaults to the newest account)")
@click.option("--to-account", help="Destination account name or ID (transfers only)")
@click.option("--category", help="Category name")
@click.option("--card", "card_id", type=int, help="Card ID to charge instead of an account")
@click.option("--date", help="Transaction date (YYYY-MM-DD or 'today', 'yesterday'); defaults to today")
@click.option(
    "--installments",
    type=click.IntRange(min=1),
    default=1,
    help="Split into this many monthly installments",
)
@click.pass_context
def add_transaction(
    ctx,
    amount: str,
    description: str,
    transaction_type: str,
    account: str | None,
    to_account: str | None,
    category: str | None,
    card_id: int | None,
    date: str | None,
    installments: int,
):
    """Add a transaction manually.

    Examples:
        finchat --owner alice add --amount 50.00 --description "Mercado" --category "Alimentação"
        finchat --owner alice add --amount 300 --description "TV" --installments 10
        finchat --owner alice add --type transfer --amount 100 --description "Reserva" \\
            --account Nubank --to-account Poupança
    """
    owner_id = require_owner(ctx)
    store = ctx.obj["store"]
    txn_type = TransactionType(transaction_type.lower())

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    # Parse date
    txn_date = None
    if date:
        try:
            txn_date = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    context = OwnerContext(
        owner_id=owner_id,
        accounts=tuple(store.list_accounts(owner_id)),
        categories=tuple(store.list_categories(owner_id)),
    )

    if txn_type == TransactionType.TRANSFER:
        if account is None or to_account is None:
            click.echo("Error: Transfers need both --account and --to-account", err=True)
            ctx.exit(1)
        if installments > 1:
            click.echo("Error: Transfers cannot be split into installments", err=True)
            ctx.exit(1)
        draft = TransferDraft(
            from_account_id=resolve_account_or_exit(ctx, store, owner_id, account),
            to_account_id=resolve_account_or_exit(ctx, store, owner_id, to_account),
            amount=txn_amount,
            description=description,
        )
    else:
        account_id = None
        if account is not None:
            account_id = resolve_account_or_exit(ctx, store, owner_id, account)

        category_obj = None
        if category:
            category_obj = next(
                (cat for cat in context.categories if cat.name.lower() == category.lower()), None
            )
            if category_obj is None:
                click.echo(f"Error: {category_not_found(category)}", err=True)
                ctx.exit(1)

        draft = ExpenseDraft(
            amount=txn_amount,
            description=description,
            category=category_obj,
            transaction_type=txn_type,
            date=txn_date,
            installment_total=installments,
            account_id=account_id,
            card_id=card_id,
        )

    try:
        reply = TransactionMaterializer(store).materialize(draft, context)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
    click.echo(reply)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
