"""Chat command parser.

Maps raw message text to a typed intent. Formal commands start with ``/``:

    /add <amount> <description...> <category-keyword>
    /balance            (alias /saldo)
    /report             (alias /relatorio)
    /help, /start
"""

from finchat.domain.intents import (
    AddExpense,
    BalanceQuery,
    Help,
    Intent,
    ParseError,
    ReportQuery,
    Unrecognized,
)
from finchat.utils.amount_parser import parse_command_amount

COMMAND_MARKER = "/"

ADD_USAGE = "Uso: /add [valor] [descrição] [categoria]\nExemplo: /add 50.00 almoço alimentação"
INVALID_AMOUNT_USAGE = "Valor inválido. Use formato: 50.00"

_KEYWORDS = {
    "add": "add",
    "balance": "balance",
    "saldo": "balance",
    "report": "report",
    "relatorio": "report",
    "help": "help",
    "start": "help",
}


def _command_keyword(token: str) -> str | None:
    """Return the canonical keyword for a command token like ``/add@mybot``."""
    if not token.startswith(COMMAND_MARKER):
        return None
    keyword = token[len(COMMAND_MARKER):].split("@", 1)[0]
    return _KEYWORDS.get(keyword)


def _parse_add(args: list[str]) -> Intent:
    if len(args) < 2:
        return ParseError(ADD_USAGE)

    try:
        amount = parse_command_amount(args[0])
    except ValueError:
        return ParseError(INVALID_AMOUNT_USAGE)

    # With only two tokens the single word is both description and hint
    description = " ".join(args[1:-1]) or args[1]
    return AddExpense(amount=amount, description=description, category_hint=args[-1])


def parse(text: str) -> Intent:
    """Parse message text into an intent. Never raises.

    Args:
        text: Raw message text

    Returns:
        The matching intent, ``ParseError`` for a malformed command, or
        ``Unrecognized`` when the text is not a command at all
    """
    tokens = text.split()
    if not tokens:
        return Unrecognized(text)

    keyword = _command_keyword(tokens[0])
    if keyword == "add":
        return _parse_add(tokens[1:])
    if keyword == "balance":
        return BalanceQuery()
    if keyword == "report":
        return ReportQuery()
    if keyword == "help":
        return Help()
    return Unrecognized(text)
