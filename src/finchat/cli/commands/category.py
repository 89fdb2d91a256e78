"""Category management commands."""

import click
from finchat.cli.error_handling import handle_domain_error, require_owner
from finchat.domain.entities import CategoryType
from finchat.domain.errors import StoreError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("create")
@click.argument("name")
@click.option(
    "--type",
    "category_type",
    type=click.Choice([t.value for t in CategoryType], case_sensitive=False),
    default=CategoryType.EXPENSE.value,
    help="Category type (default: expense)",
)
@click.pass_context
def create_category(ctx, name: str, category_type: str):
    """Create a category.

    Examples:
        finchat --owner alice category create "Alimentação"
        finchat --owner alice category create "Salário" --type income
    """
    owner_id = require_owner(ctx)
    store = ctx.obj["store"]

    try:
        category_id = store.create_category(
            owner_id=owner_id, name=name, category_type=CategoryType(category_type.lower())
        )
    except StoreError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created category '{name}' (ID: {category_id})")


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List categories."""
    owner_id = require_owner(ctx)
    store = ctx.obj["store"]

    categories = store.list_categories(owner_id)
    if not categories:
        click.echo("No categories found.")
        return

    for cat in categories:
        click.echo(f"ID: {cat.id:3d} | {cat.name:25s} | {cat.category_type.value}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
