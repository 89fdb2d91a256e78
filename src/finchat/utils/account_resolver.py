"""Utility for resolving account names to IDs."""

from finchat.database.base import LedgerStore


def resolve_account(store: LedgerStore, owner_id: str, account: str | int) -> int:
    """Resolve one of the owner's accounts by name or ID.

    Args:
        store: LedgerStore instance
        owner_id: Owner the account must belong to
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    # Try to parse as integer (handles string IDs like "1")
    try:
        account_id = int(account)
    except (ValueError, TypeError):
        account_id = None

    if account_id is not None:
        if store.get_account(owner_id, account_id) is None:
            raise ValueError(f"Account ID {account_id} not found")
        return account_id

    # Try to find by name
    for acc in store.list_accounts(owner_id):
        if acc.name == account:
            return acc.id

    raise ValueError(f"Account '{account}' not found")
