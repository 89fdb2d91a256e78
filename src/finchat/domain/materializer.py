"""Transaction materializer.

Turns resolved drafts into ledger rows: a single expense or income, an
installment series, or an internal transfer.
"""

import uuid
from datetime import date
from typing import Callable, Optional

from finchat.database.base import LedgerStore
from finchat.domain import replies
from finchat.domain.entities import (
    Account,
    NewTransaction,
    OwnerContext,
    TransactionStatus,
)
from finchat.domain.errors import (
    InstallmentWriteFailed,
    InvalidAmountError,
    NoAccountError,
    NotFoundError,
    StoreError,
    ValidationError,
    account_not_found,
    card_not_found,
    invalid_amount,
    no_account,
    sub_cent_amount,
)
from finchat.domain.intents import Draft, ExpenseDraft, TransferDraft
from finchat.domain.transfer import TransferService
from finchat.utils.amount_parser import is_whole_cents
from finchat.utils.date_parser import add_months


class TransactionMaterializer:
    """Writes drafts to the ledger and renders the confirmation."""

    def __init__(
        self,
        store: LedgerStore,
        transfer_service: Optional[TransferService] = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the materializer.

        Args:
            store: Ledger store instance
            transfer_service: Service used for transfer drafts
            today: Clock used for default dates and installment status
        """
        self.store = store
        self.transfer_service = transfer_service or TransferService(store, today=today)
        self.today = today

    def materialize(self, draft: Draft, context: OwnerContext) -> str:
        """Write a draft for the context's owner.

        Args:
            draft: ExpenseDraft or TransferDraft
            context: Owner and the accounts/categories loaded for this request

        Returns:
            Confirmation text for the user

        Raises:
            OperationError: For refusals the user can act on (no account,
                invalid amount, transfer validation)
            InstallmentWriteFailed: If an installment batch could not be written
            StoreError: If a single write failed
        """
        if isinstance(draft, TransferDraft):
            return self._materialize_transfer(draft, context)
        return self._materialize_entry(draft, context)

    def _resolve_account(self, draft: ExpenseDraft, context: OwnerContext) -> Optional[Account]:
        if draft.account_id is not None:
            account = self.store.get_account(context.owner_id, draft.account_id)
            if account is None:
                raise NotFoundError(account_not_found(draft.account_id))
            return account
        if draft.card_id is not None:
            return None
        if not context.accounts:
            raise NoAccountError(no_account())
        return context.accounts[0]

    def build_rows(self, draft: ExpenseDraft, context: OwnerContext, account: Optional[Account]) -> list[NewTransaction]:
        """Expand a draft into the rows to insert.

        Installment ``i`` of ``N`` is dated ``i - 1`` calendar months after the
        base date and described as ``"<description> (i/N)"``. Rows dated in the
        future are pending and leave the balance untouched until confirmed.
        """
        today = self.today()
        base_date = draft.date or today
        total = draft.installment_total
        group_id = str(uuid.uuid4()) if total > 1 else None

        rows = []
        for index in range(1, total + 1):
            row_date = add_months(base_date, index - 1)
            rows.append(
                NewTransaction(
                    owner_id=context.owner_id,
                    transaction_type=draft.transaction_type,
                    amount=draft.amount,
                    description=f"{draft.description} ({index}/{total})" if total > 1 else draft.description,
                    date=row_date,
                    account_id=account.id if account is not None else None,
                    card_id=draft.card_id,
                    category_id=draft.category.id if draft.category is not None else None,
                    status=TransactionStatus.CONFIRMED if row_date <= today else TransactionStatus.PENDING,
                    installment_index=index if total > 1 else None,
                    installment_total=total if total > 1 else None,
                    installment_group_id=group_id,
                )
            )
        return rows

    def _materialize_entry(self, draft: ExpenseDraft, context: OwnerContext) -> str:
        if draft.amount <= 0:
            raise InvalidAmountError(invalid_amount())
        if not is_whole_cents(draft.amount):
            raise InvalidAmountError(sub_cent_amount())
        if draft.installment_total < 1:
            raise ValidationError("Installment count must be at least 1")

        account = self._resolve_account(draft, context)
        if draft.card_id is not None and self.store.get_card(context.owner_id, draft.card_id) is None:
            raise NotFoundError(card_not_found(draft.card_id))

        rows = self.build_rows(draft, context, account)
        if draft.installment_total > 1:
            try:
                self.store.create_transactions(rows)
            except StoreError as exc:
                # Not retried: a retry could post the series twice
                raise InstallmentWriteFailed(
                    f"Installment batch of {len(rows)} rows failed for owner {context.owner_id}"
                ) from exc
        else:
            self.store.create_transactions(rows)

        account_name = account.name if account is not None else f"Cartão {draft.card_id}"
        return replies.entry_confirmation(
            transaction_type=draft.transaction_type,
            amount=draft.amount,
            description=draft.description,
            category=draft.category,
            account_name=account_name,
            installment_total=draft.installment_total,
        )

    def _materialize_transfer(self, draft: TransferDraft, context: OwnerContext) -> str:
        self.transfer_service.transfer(
            owner_id=context.owner_id,
            from_account_id=draft.from_account_id,
            to_account_id=draft.to_account_id,
            amount=draft.amount,
            description=draft.description,
        )
        accounts = {
            acc.id: acc.name
            for acc in self.store.get_accounts(context.owner_id, [draft.from_account_id, draft.to_account_id])
        }
        return replies.transfer_confirmation(
            draft.amount,
            accounts.get(draft.from_account_id, str(draft.from_account_id)),
            accounts.get(draft.to_account_id, str(draft.to_account_id)),
        )
