"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so string columns become the
domain enums in one place.
"""

from finchat.domain import entities as domain
from finchat.database.models import (
    Account as ORMAccount,
    Card as ORMCard,
    Category as ORMCategory,
    ChannelBinding as ORMChannelBinding,
    Transaction as ORMTransaction,
    Transfer as ORMTransfer,
)


def channel_binding_to_domain(orm_binding: ORMChannelBinding) -> domain.ChannelBinding:
    """Convert SQLAlchemy ChannelBinding model to domain ChannelBinding entity."""
    return domain.ChannelBinding(
        id=orm_binding.id,
        owner_id=orm_binding.owner_id,
        channel_chat_id=orm_binding.channel_chat_id,
        active=orm_binding.active,
        created_at=orm_binding.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        owner_id=orm_account.owner_id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        balance=orm_account.balance,
        initial_balance=orm_account.initial_balance,
        active=orm_account.active,
        created_at=orm_account.created_at,
    )


def card_to_domain(orm_card: ORMCard) -> domain.Card:
    """Convert SQLAlchemy Card model to domain Card entity."""
    return domain.Card(
        id=orm_card.id,
        owner_id=orm_card.owner_id,
        name=orm_card.name,
        brand=orm_card.brand,
        credit_limit=orm_card.credit_limit,
        closing_day=orm_card.closing_day,
        due_day=orm_card.due_day,
        active=orm_card.active,
        created_at=orm_card.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        owner_id=orm_category.owner_id,
        name=orm_category.name,
        category_type=domain.CategoryType(orm_category.category_type),
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        owner_id=orm_transaction.owner_id,
        transaction_type=domain.TransactionType(orm_transaction.transaction_type),
        amount=orm_transaction.amount,
        description=orm_transaction.description,
        date=orm_transaction.date,
        account_id=orm_transaction.account_id,
        destination_account_id=orm_transaction.destination_account_id,
        card_id=orm_transaction.card_id,
        category_id=orm_transaction.category_id,
        status=domain.TransactionStatus(orm_transaction.status),
        installment_index=orm_transaction.installment_index,
        installment_total=orm_transaction.installment_total,
        installment_group_id=orm_transaction.installment_group_id,
        created_at=orm_transaction.created_at,
    )


def new_transaction_to_orm(new_transaction: domain.NewTransaction) -> ORMTransaction:
    """Build a SQLAlchemy Transaction row from a domain NewTransaction."""
    return ORMTransaction(
        owner_id=new_transaction.owner_id,
        transaction_type=new_transaction.transaction_type.value,
        amount=new_transaction.amount,
        description=new_transaction.description,
        date=new_transaction.date,
        account_id=new_transaction.account_id,
        card_id=new_transaction.card_id,
        category_id=new_transaction.category_id,
        status=new_transaction.status.value,
        installment_index=new_transaction.installment_index,
        installment_total=new_transaction.installment_total,
        installment_group_id=new_transaction.installment_group_id,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.TransferRecord:
    """Convert SQLAlchemy Transfer model to domain TransferRecord entity."""
    return domain.TransferRecord(
        id=orm_transfer.id,
        owner_id=orm_transfer.owner_id,
        from_account_id=orm_transfer.from_account_id,
        to_account_id=orm_transfer.to_account_id,
        amount=orm_transfer.amount,
        outgoing_transaction_id=orm_transfer.outgoing_transaction_id,
        incoming_transaction_id=orm_transfer.incoming_transaction_id,
        date=orm_transfer.date,
        created_at=orm_transfer.created_at,
    )
