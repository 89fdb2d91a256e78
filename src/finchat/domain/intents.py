"""Typed intents produced by the message parsers.

``Intent`` is a closed union; downstream code dispatches on the concrete
class so every branch is visible at the parse boundary.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Union

from finchat.domain.entities import Category, TransactionType


@dataclass(frozen=True)
class AddExpense:
    """``/add <amount> <description...> <category-keyword>``."""

    amount: Decimal
    description: str
    category_hint: str


@dataclass(frozen=True)
class BalanceQuery:
    pass


@dataclass(frozen=True)
class ReportQuery:
    pass


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class ParseError:
    """Malformed input; ``message`` is a usage hint for the user."""

    message: str


@dataclass(frozen=True)
class Unrecognized:
    """Text that is not a formal command."""

    text: str


Intent = Union[AddExpense, BalanceQuery, ReportQuery, Help, ParseError, Unrecognized]


@dataclass(frozen=True)
class ExpenseDraft:
    """A resolved expense or income ready to be materialized.

    ``installment_total`` greater than one expands into one row per month,
    each carrying ``amount``.
    """

    amount: Decimal
    description: str
    category: Optional[Category] = None
    transaction_type: TransactionType = TransactionType.EXPENSE
    date: Optional[date] = None
    installment_total: int = 1
    account_id: Optional[int] = None
    card_id: Optional[int] = None


@dataclass(frozen=True)
class TransferDraft:
    """A request to move funds between two of the owner's accounts."""

    from_account_id: int
    to_account_id: int
    amount: Decimal
    description: str = ""


Draft = Union[ExpenseDraft, TransferDraft]
