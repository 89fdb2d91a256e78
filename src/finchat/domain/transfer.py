"""Transfer domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from finchat.database.base import LedgerStore
from finchat.domain.errors import (
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountError,
    StoreError,
    UnauthorizedError,
    accounts_not_owned,
    insufficient_funds,
    invalid_amount,
    same_account,
    sub_cent_amount,
)
from finchat.utils.amount_parser import is_whole_cents

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Transferência interna"


class TransferService:
    """Service for moving funds between two of an owner's accounts."""

    def __init__(self, store: LedgerStore, today: Callable[[], date] = date.today):
        """Initialize transfer service.

        Args:
            store: Ledger store instance
            today: Clock used for the transfer date
        """
        self.store = store
        self.today = today

    def transfer(
        self,
        owner_id: str,
        from_account_id: int,
        to_account_id: int,
        amount: Optional[Decimal],
        description: Optional[str] = None,
    ) -> int:
        """Transfer ``amount`` from one account to another.

        Validation happens here; the debit, credit, both transactions and
        the transfer record are written by the store's atomic primitive,
        which checks the balance again inside its own unit.

        Args:
            owner_id: Owner performing the transfer
            from_account_id: Source account ID
            to_account_id: Destination account ID
            amount: Positive amount to move
            description: Optional description for both transactions

        Returns:
            Transfer record ID

        Raises:
            InvalidAmountError: If amount is missing, not positive or finer than a cent
            SameAccountError: If source and destination are the same
            UnauthorizedError: If the owner does not own both accounts
            InsufficientFundsError: If the source balance is too low
            StoreError: If the atomic execution failed
        """
        if amount is None or amount <= 0:
            raise InvalidAmountError(invalid_amount())
        if not is_whole_cents(amount):
            raise InvalidAmountError(sub_cent_amount())
        if from_account_id == to_account_id:
            raise SameAccountError(same_account())

        accounts = self.store.get_accounts(owner_id, [from_account_id, to_account_id])
        if len(accounts) != 2:
            raise UnauthorizedError(accounts_not_owned())

        source = next(acc for acc in accounts if acc.id == from_account_id)
        if source.balance < amount:
            raise InsufficientFundsError(insufficient_funds(source.name))

        try:
            transfer_id = self.store.execute_transfer(
                owner_id=owner_id,
                from_account_id=from_account_id,
                to_account_id=to_account_id,
                amount=amount,
                description=description or DEFAULT_DESCRIPTION,
                transfer_date=self.today(),
            )
        except StoreError:
            logger.exception(
                "Transfer failed for owner %s: %s -> %s (%s)",
                owner_id,
                from_account_id,
                to_account_id,
                amount,
            )
            raise

        logger.info("Transfer %s executed for owner %s", transfer_id, owner_id)
        return transfer_id
