"""Domain model entities for finchat.

These are pure data classes representing ledger concepts, independent of
database schema. Every entity is scoped by an opaque owner identifier.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of account."""

    CHECKING = "checking"
    SAVINGS = "savings"
    WALLET = "wallet"
    EXTERNAL = "external"


class CategoryType(str, Enum):
    """Polarity of a category."""

    EXPENSE = "expense"
    INCOME = "income"


class TransactionType(str, Enum):
    """Kind of ledger movement."""

    EXPENSE = "expense"
    INCOME = "income"
    TRANSFER = "transfer"


class TransactionStatus(str, Enum):
    """Settlement status of a transaction."""

    PENDING = "pending"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class ChannelBinding:
    """Maps a chat-channel identifier to an owner."""

    id: int
    owner_id: str
    channel_chat_id: str
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Bank-like account domain entity."""

    id: int
    owner_id: str
    name: str
    account_type: AccountType
    balance: Decimal
    initial_balance: Decimal
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class Card:
    """Credit card domain entity."""

    id: int
    owner_id: str
    name: str
    brand: str
    credit_limit: Decimal
    closing_day: int
    due_day: int
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity."""

    id: int
    owner_id: str
    name: str
    category_type: CategoryType
    created_at: datetime


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    Amounts are always positive; the direction comes from the type. The
    outgoing leg of a transfer carries ``destination_account_id``, the
    incoming leg does not.
    """

    id: int
    owner_id: str
    transaction_type: TransactionType
    amount: Decimal
    description: str
    date: date
    account_id: Optional[int]
    destination_account_id: Optional[int]
    card_id: Optional[int]
    category_id: Optional[int]
    status: TransactionStatus
    installment_index: Optional[int]
    installment_total: Optional[int]
    installment_group_id: Optional[str]
    created_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """Amount with the sign of its effect on ``account_id``."""
        if self.transaction_type == TransactionType.INCOME:
            return self.amount
        if self.transaction_type == TransactionType.TRANSFER and self.destination_account_id is None:
            return self.amount
        return -self.amount


@dataclass(frozen=True)
class NewTransaction:
    """A transaction row about to be written to the ledger."""

    owner_id: str
    transaction_type: TransactionType
    amount: Decimal
    description: str
    date: date
    account_id: Optional[int] = None
    card_id: Optional[int] = None
    category_id: Optional[int] = None
    status: TransactionStatus = TransactionStatus.CONFIRMED
    installment_index: Optional[int] = None
    installment_total: Optional[int] = None
    installment_group_id: Optional[str] = None

    @property
    def balance_delta(self) -> Decimal:
        """Change this row applies to its account's balance when written."""
        if self.account_id is None or self.status != TransactionStatus.CONFIRMED:
            return Decimal("0")
        if self.transaction_type == TransactionType.INCOME:
            return self.amount
        return -self.amount


@dataclass(frozen=True)
class TransferRecord:
    """Links the two legs of an internal transfer."""

    id: int
    owner_id: str
    from_account_id: int
    to_account_id: int
    amount: Decimal
    outgoing_transaction_id: int
    incoming_transaction_id: int
    date: date
    created_at: datetime


@dataclass(frozen=True)
class OwnerContext:
    """Read-only inputs loaded once per inbound message.

    ``accounts`` keeps the store's order; the first one is the default
    destination for chat transactions.
    """

    owner_id: str
    accounts: tuple[Account, ...] = ()
    categories: tuple[Category, ...] = ()


@dataclass(frozen=True)
class MonthlyReport:
    """Income and expense totals for one month."""

    start_date: date
    end_date: date
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses
