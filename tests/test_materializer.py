"""Tests for the transaction materializer."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import SQLAlchemyError

from finchat.database.sqlalchemy_db import SQLAlchemyLedgerStore
from finchat.domain.entities import OwnerContext, TransactionStatus, TransactionType
from finchat.domain.errors import (
    InstallmentWriteFailed,
    InvalidAmountError,
    NoAccountError,
    NotFoundError,
    ValidationError,
)
from finchat.domain.intents import ExpenseDraft, TransferDraft
from finchat.domain.materializer import TransactionMaterializer


class FailingRowStore(SQLAlchemyLedgerStore):
    """Store whose N-th row build in a batch raises a database error."""

    def __init__(self, database_url, fail_on):
        super().__init__(database_url)
        self.fail_on = fail_on
        self.built = 0

    def _build_row(self, new_transaction):
        self.built += 1
        if self.built == self.fail_on:
            raise SQLAlchemyError("simulated failure")
        return super()._build_row(new_transaction)


class FailingBalanceStore(SQLAlchemyLedgerStore):
    """Store that fails after the rows were flushed, while adjusting the balance."""

    def _apply_balance_delta(self, session, owner_id, account_id, delta):
        raise SQLAlchemyError("simulated failure")


def test_single_expense_debits_default_account(temp_db, materializer, owner_context, owner_id):
    """The first account of the context receives the expense."""
    account = owner_context.accounts[0]
    category = owner_context.categories[0]
    draft = ExpenseDraft(amount=Decimal("50.00"), description="almoço", category=category)

    reply = materializer.materialize(draft, owner_context)

    assert "Despesa registrada: R$ 50.00" in reply
    assert "📝 almoço" in reply
    assert f"🏷️ {category.name}" in reply
    assert f"🏦 {account.name}" in reply

    transactions = temp_db.list_transactions(owner_id)
    assert len(transactions) == 1
    txn = transactions[0]
    assert txn.account_id == account.id
    assert txn.category_id == category.id
    assert txn.date == date(2024, 3, 15)
    assert txn.status == TransactionStatus.CONFIRMED
    assert txn.installment_group_id is None
    assert temp_db.get_account(owner_id, account.id).balance == Decimal("950.00")


def test_uncategorized_expense_reply(materializer, owner_context):
    draft = ExpenseDraft(amount=Decimal("10"), description="diversos")

    reply = materializer.materialize(draft, owner_context)

    assert "⚠️ Sem categoria" in reply


def test_newest_account_is_default(temp_db, materializer, owner_id, sample_account, second_account):
    context = OwnerContext(owner_id=owner_id, accounts=tuple(temp_db.list_accounts(owner_id, limit=5)))
    draft = ExpenseDraft(amount=Decimal("20"), description="lanche")

    materializer.materialize(draft, context)

    assert temp_db.get_account(owner_id, second_account.id).balance == Decimal("180.00")
    assert temp_db.get_account(owner_id, sample_account.id).balance == Decimal("1000.00")


def test_income_credits_account(temp_db, materializer, owner_context, owner_id):
    account = owner_context.accounts[0]
    draft = ExpenseDraft(
        amount=Decimal("3000"), description="salário", transaction_type=TransactionType.INCOME
    )

    reply = materializer.materialize(draft, owner_context)

    assert "Receita registrada" in reply
    assert temp_db.get_account(owner_id, account.id).balance == Decimal("4000.00")


def test_no_account_is_refused(temp_db, materializer, owner_id):
    context = OwnerContext(owner_id=owner_id)

    with pytest.raises(NoAccountError) as excinfo:
        materializer.materialize(ExpenseDraft(amount=Decimal("5"), description="café"), context)

    assert "Nenhuma conta encontrada" in str(excinfo.value)
    assert temp_db.list_transactions(owner_id) == []


@pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10"), Decimal("0.004")])
def test_invalid_amount_is_refused(temp_db, materializer, owner_context, owner_id, amount):
    with pytest.raises(InvalidAmountError):
        materializer.materialize(ExpenseDraft(amount=amount, description="x"), owner_context)

    assert temp_db.list_transactions(owner_id) == []


def test_installment_count_below_one(materializer, owner_context):
    with pytest.raises(ValidationError):
        materializer.materialize(
            ExpenseDraft(amount=Decimal("10"), description="x", installment_total=0), owner_context
        )


def test_foreign_account_is_not_found(temp_db, materializer, owner_context):
    other_account = temp_db.create_account(owner_id="owner-2", name="Outra")
    draft = ExpenseDraft(amount=Decimal("10"), description="x", account_id=other_account)

    with pytest.raises(NotFoundError):
        materializer.materialize(draft, owner_context)


def test_installments_create_monthly_series(temp_db, materializer, owner_context, owner_id):
    """N rows, indexes 1..N, one month apart, sharing one group id."""
    draft = ExpenseDraft(amount=Decimal("100.00"), description="TV", installment_total=3)

    reply = materializer.materialize(draft, owner_context)

    assert "Despesa parcelada: 3x de R$ 100.00" in reply

    transactions = temp_db.list_transactions(owner_id)
    assert len(transactions) == 3
    assert [txn.installment_index for txn in transactions] == [1, 2, 3]
    assert {txn.installment_total for txn in transactions} == {3}
    assert len({txn.installment_group_id for txn in transactions}) == 1
    assert transactions[0].installment_group_id is not None
    assert [txn.date for txn in transactions] == [
        date(2024, 3, 15),
        date(2024, 4, 15),
        date(2024, 5, 15),
    ]
    assert [txn.description for txn in transactions] == ["TV (1/3)", "TV (2/3)", "TV (3/3)"]
    assert all(txn.amount == Decimal("100.00") for txn in transactions)


def test_future_installments_are_pending(temp_db, materializer, owner_context, owner_id):
    """Only installments already due touch the balance."""
    account = owner_context.accounts[0]
    draft = ExpenseDraft(amount=Decimal("100.00"), description="TV", installment_total=3)

    materializer.materialize(draft, owner_context)

    statuses = [txn.status for txn in temp_db.list_transactions(owner_id)]
    assert statuses == [
        TransactionStatus.CONFIRMED,
        TransactionStatus.PENDING,
        TransactionStatus.PENDING,
    ]
    assert temp_db.get_account(owner_id, account.id).balance == Decimal("900.00")


def test_installments_roll_over_year(materializer, owner_context):
    draft = ExpenseDraft(
        amount=Decimal("50"), description="curso", date=date(2024, 11, 30), installment_total=4
    )

    rows = materializer.build_rows(draft, owner_context, owner_context.accounts[0])

    assert [row.date for row in rows] == [
        date(2024, 11, 30),
        date(2024, 12, 30),
        date(2025, 1, 30),
        date(2025, 2, 28),
    ]


def test_installments_clamp_to_month_end(materializer, owner_context):
    """A day missing in the target month falls back to its last day."""
    draft = ExpenseDraft(
        amount=Decimal("50"), description="curso", date=date(2024, 1, 31), installment_total=3
    )

    rows = materializer.build_rows(draft, owner_context, owner_context.accounts[0])

    assert [row.date for row in rows] == [date(2024, 1, 31), date(2024, 2, 29), date(2024, 3, 31)]
    assert [row.status for row in rows] == [
        TransactionStatus.CONFIRMED,
        TransactionStatus.CONFIRMED,
        TransactionStatus.PENDING,
    ]


def test_past_installments_all_debit_balance(temp_db, materializer, owner_context, owner_id):
    account = owner_context.accounts[0]
    draft = ExpenseDraft(
        amount=Decimal("25"), description="academia", date=date(2024, 1, 10), installment_total=3
    )

    materializer.materialize(draft, owner_context)

    assert temp_db.get_account(owner_id, account.id).balance == Decimal("925.00")


@pytest.mark.parametrize("fail_on", [1, 3, 5])
def test_installment_failure_writes_nothing(temp_db, today, owner_context, owner_id, fail_on):
    """A failure at any row leaves no installment behind."""
    account = owner_context.accounts[0]
    store = FailingRowStore(f"sqlite:///{temp_db.database_path}", fail_on=fail_on)
    materializer = TransactionMaterializer(store, today=today)
    draft = ExpenseDraft(amount=Decimal("100"), description="geladeira", installment_total=5)

    with pytest.raises(InstallmentWriteFailed):
        materializer.materialize(draft, owner_context)
    store.disconnect()

    assert temp_db.list_transactions(owner_id) == []
    assert temp_db.get_account(owner_id, account.id).balance == Decimal("1000.00")


def test_installment_failure_after_flush_rolls_back(temp_db, today, owner_context, owner_id):
    store = FailingBalanceStore(f"sqlite:///{temp_db.database_path}")
    materializer = TransactionMaterializer(store, today=today)
    draft = ExpenseDraft(amount=Decimal("100"), description="geladeira", installment_total=5)

    with pytest.raises(InstallmentWriteFailed):
        materializer.materialize(draft, owner_context)
    store.disconnect()

    assert temp_db.list_transactions(owner_id) == []


def test_same_draft_twice_creates_two_rows(temp_db, materializer, owner_context, owner_id):
    """Resubmission is not deduplicated."""
    draft = ExpenseDraft(amount=Decimal("50"), description="almoço")

    materializer.materialize(draft, owner_context)
    materializer.materialize(draft, owner_context)

    assert len(temp_db.list_transactions(owner_id)) == 2
    assert temp_db.get_account(owner_id, owner_context.accounts[0].id).balance == Decimal("900.00")


def test_card_expense_leaves_accounts_untouched(temp_db, materializer, owner_context, owner_id):
    card_id = temp_db.create_card(owner_id=owner_id, name="Nubank", brand="Mastercard")
    draft = ExpenseDraft(amount=Decimal("80"), description="farmácia", card_id=card_id)

    reply = materializer.materialize(draft, owner_context)

    assert f"Cartão {card_id}" in reply
    txn = temp_db.list_transactions(owner_id)[0]
    assert txn.card_id == card_id
    assert txn.account_id is None
    assert temp_db.get_account(owner_id, owner_context.accounts[0].id).balance == Decimal("1000.00")


def test_unknown_card_is_not_found(materializer, owner_context):
    with pytest.raises(NotFoundError):
        materializer.materialize(
            ExpenseDraft(amount=Decimal("10"), description="x", card_id=999), owner_context
        )


def test_transfer_draft(temp_db, materializer, owner_id, sample_account, second_account):
    context = OwnerContext(owner_id=owner_id, accounts=tuple(temp_db.list_accounts(owner_id)))
    draft = TransferDraft(
        from_account_id=sample_account.id, to_account_id=second_account.id, amount=Decimal("100")
    )

    reply = materializer.materialize(draft, context)

    assert "Transferência realizada: R$ 100.00" in reply
    assert "Conta Corrente → Poupança" in reply
