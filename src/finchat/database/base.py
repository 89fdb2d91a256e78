"""Abstract ledger store interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from finchat.domain.entities import (
    Account,
    AccountType,
    Card,
    Category,
    CategoryType,
    ChannelBinding,
    NewTransaction,
    Transaction,
    TransferRecord,
)


class LedgerStore(ABC):
    """Abstract owner-scoped ledger store for finchat."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize store schema (create tables)."""
        pass

    # Channel binding operations
    @abstractmethod
    def find_channel_binding(self, channel_chat_id: str) -> Optional[ChannelBinding]:
        """Get the active binding for a chat identifier."""
        pass

    @abstractmethod
    def bind_channel(self, owner_id: str, channel_chat_id: str) -> int:
        """Bind a chat identifier to an owner (replacing any previous owner). Returns binding ID."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        owner_id: str,
        name: str,
        account_type: AccountType = AccountType.CHECKING,
        initial_balance: Decimal = Decimal("0"),
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, owner_id: str, account_id: int) -> Optional[Account]:
        """Get one of the owner's accounts by ID."""
        pass

    @abstractmethod
    def list_accounts(self, owner_id: str, limit: Optional[int] = None) -> list[Account]:
        """List the owner's active accounts, most recently created first."""
        pass

    @abstractmethod
    def get_accounts(self, owner_id: str, account_ids: Sequence[int]) -> list[Account]:
        """Get the owner's accounts among ``account_ids``; foreign accounts are omitted."""
        pass

    # Card operations
    @abstractmethod
    def create_card(
        self,
        owner_id: str,
        name: str,
        brand: str,
        credit_limit: Decimal = Decimal("0"),
        closing_day: int = 1,
        due_day: int = 10,
    ) -> int:
        """Create a credit card. Returns card ID."""
        pass

    @abstractmethod
    def get_card(self, owner_id: str, card_id: int) -> Optional[Card]:
        """Get one of the owner's cards by ID."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self, owner_id: str, name: str, category_type: CategoryType = CategoryType.EXPENSE
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def list_categories(self, owner_id: str) -> list[Category]:
        """List all of the owner's categories."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transactions(self, new_transactions: Sequence[NewTransaction]) -> list[int]:
        """Write a batch of transactions. Returns their IDs in input order.

        The batch and the balance changes of its confirmed rows are applied
        all-or-nothing.

        Raises:
            StoreError: If the batch could not be written (nothing was applied)
        """
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        owner_id: str,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        installment_group_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List the owner's transactions with optional filters."""
        pass

    # Transfer operations
    @abstractmethod
    def execute_transfer(
        self,
        owner_id: str,
        from_account_id: int,
        to_account_id: int,
        amount: Decimal,
        description: str,
        transfer_date: date,
    ) -> int:
        """Move funds between two of the owner's accounts. Returns transfer ID.

        Creates the outgoing and incoming transactions, the transfer record
        and both balance changes as one atomic unit. Sufficiency of the source
        balance is re-verified inside that unit.

        Raises:
            InsufficientFundsError: If the source balance is lower than ``amount``
            UnauthorizedError: If either account does not belong to the owner
            StoreError: If the unit failed for any other reason
        """
        pass

    @abstractmethod
    def get_transfer(self, transfer_id: int) -> Optional[TransferRecord]:
        """Get transfer record by ID."""
        pass
