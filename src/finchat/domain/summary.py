"""Monthly summary domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from finchat.database.base import LedgerStore
from finchat.domain.entities import MonthlyReport, TransactionType
from finchat.utils.date_parser import current_month_range


class SummaryService:
    """Service for the chat balance and report summaries."""

    def __init__(self, store: LedgerStore):
        """Initialize summary service.

        Args:
            store: Ledger store instance
        """
        self.store = store

    def monthly_report(self, owner_id: str, today: Optional[date] = None) -> MonthlyReport:
        """Aggregate income and expenses for the month containing ``today``.

        Transfers move money between the owner's own accounts and are left out.

        Args:
            owner_id: Owner to report on
            today: Any date inside the month (defaults to today)

        Returns:
            MonthlyReport with the month bounds and totals
        """
        start_date, end_date = current_month_range(today)
        transactions = self.store.list_transactions(owner_id, start_date=start_date, end_date=end_date)

        income = Decimal("0")
        expenses = Decimal("0")
        for txn in transactions:
            if txn.transaction_type == TransactionType.INCOME:
                income += txn.amount
            elif txn.transaction_type == TransactionType.EXPENSE:
                expenses += txn.amount

        return MonthlyReport(start_date=start_date, end_date=end_date, income=income, expenses=expenses)
