"""CLI error handling helpers."""

import click

from finchat.domain import replies
from finchat.domain.errors import DomainError, StoreError


def handle_domain_error(ctx: click.Context, error: DomainError | StoreError | ValueError) -> None:
    """Render a domain or store error and exit with failure."""
    message = replies.error_message(error) if isinstance(error, StoreError) else str(error)
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def require_owner(ctx: click.Context) -> str:
    """Return the owner selected with --owner, or exit with a CLI error."""
    owner_id = ctx.obj.get("owner_id")
    if not owner_id:
        click.echo("Error: --owner (or FINCHAT_OWNER) is required for this command", err=True)
        ctx.exit(1)
    return owner_id
