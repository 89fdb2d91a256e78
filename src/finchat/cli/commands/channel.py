"""Chat channel commands."""

import click
from finchat.cli.error_handling import handle_domain_error, require_owner
from finchat.domain.dispatcher import InboundMessage, WebhookDispatcher
from finchat.domain.errors import StoreError


@click.command("bind")
@click.argument("chat_id")
@click.pass_context
def bind_channel(ctx, chat_id: str):
    """Bind a chat identifier to the owner so its messages are accepted.

    Example:
        finchat --owner alice bind 123456789
    """
    owner_id = require_owner(ctx)
    store = ctx.obj["store"]

    try:
        binding_id = store.bind_channel(owner_id=owner_id, channel_chat_id=chat_id)
    except StoreError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Bound chat {chat_id} to owner '{owner_id}' (ID: {binding_id})")


@click.command("message")
@click.argument("text")
@click.option("--chat-id", required=True, help="Chat identifier the message comes from")
@click.pass_context
def send_message(ctx, text: str, chat_id: str):
    """Process a chat message as if it arrived through the webhook.

    Examples:
        finchat message --chat-id 123456789 "/add 50.00 almoço alimentação"
        finchat message --chat-id 123456789 "Gastei 30 reais no supermercado"
    """
    store = ctx.obj["store"]
    reply = WebhookDispatcher(store).handle(InboundMessage(chat_id=chat_id, text=text))

    click.echo(reply.text)
    if reply.status_code != 200:
        ctx.exit(1)


def register_commands(cli):
    """Register channel commands with main CLI."""
    cli.add_command(bind_channel)
    cli.add_command(send_message)
