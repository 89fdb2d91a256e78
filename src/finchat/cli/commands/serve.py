"""Web service command."""

import logging

import click
import uvicorn

from finchat.config import Settings
from finchat.web.app import create_app


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to listen on")
@click.pass_context
def serve(ctx, host: str, port: int):
    """Run the webhook and transfer HTTP endpoints."""
    try:
        settings = Settings.from_env(database_url=ctx.obj.get("database_url"))
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
