"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class OperationError(DomainError):
    """A ledger operation was refused; the message is safe to show the user."""


class NoAccountError(OperationError):
    """Owner has no account to post against."""


class SameAccountError(OperationError):
    """Transfer source and destination are the same account."""


class UnauthorizedError(OperationError):
    """Owner does not own every account involved."""


class InsufficientFundsError(OperationError):
    """Source account balance is lower than the requested amount."""


class InvalidAmountError(OperationError, ValidationError):
    """Amount is missing, not positive or finer than a cent."""


class StoreError(Exception):
    """Infrastructure failure inside the ledger store.

    Writes that raise this have been rolled back.
    """


class InstallmentWriteFailed(StoreError):
    """An installment batch could not be written."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def card_not_found(card_id: int) -> str:
    """Return message for missing card."""
    return f"Card {card_id} not found"


def category_not_found(name: str) -> str:
    """Return message for missing category by name."""
    return f"Category '{name}' not found"


def no_account() -> str:
    return "Nenhuma conta encontrada. Adicione uma conta primeiro no app."


def same_account() -> str:
    return "Conta de origem e destino devem ser diferentes"


def accounts_not_owned() -> str:
    return "Contas não encontradas ou não pertencem ao usuário"


def insufficient_funds(account_name: str | None = None) -> str:
    """Return message for a transfer larger than the source balance."""
    if account_name:
        return f"Saldo insuficiente na conta de origem ({account_name})"
    return "Saldo insuficiente na conta de origem"


def invalid_amount() -> str:
    return "O valor deve ser maior que zero"


def sub_cent_amount() -> str:
    return "O valor deve ter no máximo duas casas decimais"
