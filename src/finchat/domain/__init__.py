"""Domain layer for finchat.

Services live in their own modules (``finchat.domain.dispatcher``,
``finchat.domain.materializer``...) and are imported from there; this package
only re-exports the pure data types so the store layer can import them
without a cycle.
"""

from finchat.domain.entities import (
    Account,
    Card,
    Category,
    ChannelBinding,
    Transaction,
    TransferRecord,
)

__all__ = [
    "Account",
    "Card",
    "Category",
    "ChannelBinding",
    "Transaction",
    "TransferRecord",
]
