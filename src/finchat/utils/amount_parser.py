"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_COMMAND_AMOUNT = re.compile(r"^\d+(?:\.\d+)?$")

CENT = Decimal("0.01")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "123,45"
    - "R$ 123,45"
    - "-123.45"
    - "1.234,56" / "1,234.56" (the last separator is the decimal one)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    # Remove currency symbols
    amount_str = re.sub(r"(?i)r\$|[$€£]", "", amount_str).strip()

    last_comma = amount_str.rfind(",")
    last_dot = amount_str.rfind(".")
    if last_comma > last_dot:
        amount_str = amount_str.replace(".", "").replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e!r}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return amount


def parse_command_amount(token: str) -> Decimal:
    """Parse the amount argument of a chat command.

    Only plain non-negative decimals with ``.`` as separator and at most
    two significant decimal places are accepted.

    Raises:
        ValueError: If the token is not such a number
    """
    if not _COMMAND_AMOUNT.match(token):
        raise ValueError(f"Invalid amount '{token}'")
    amount = Decimal(token)
    if not is_whole_cents(amount):
        raise ValueError(f"Amount '{token}' has fractions of a cent")
    return amount


def is_whole_cents(amount: Decimal) -> bool:
    """Return True if ``amount`` can be stored without rounding below the cent."""
    try:
        return amount == amount.quantize(CENT)
    except InvalidOperation:
        return False


def format_brl(amount: Decimal) -> str:
    """Render an amount the way chat replies show it, e.g. ``R$ 50.00``."""
    return f"R$ {amount:.2f}"
