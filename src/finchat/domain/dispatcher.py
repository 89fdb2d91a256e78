"""Inbound chat message dispatcher.

One call handles one message end to end: identity resolution, context
loading, parsing, materialization and reply rendering. No state is kept
between calls.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from finchat.database.base import LedgerStore
from finchat.domain import replies
from finchat.domain.entities import OwnerContext
from finchat.domain.errors import DomainError, StoreError
from finchat.domain.interpreter import CategoryMatcher, find_expense_category, interpret
from finchat.domain.intents import (
    AddExpense,
    BalanceQuery,
    Draft,
    ExpenseDraft,
    Help,
    Intent,
    ParseError,
    ReportQuery,
    Unrecognized,
)
from finchat.domain.materializer import TransactionMaterializer
from finchat.domain.parser import parse
from finchat.domain.summary import SummaryService

logger = logging.getLogger(__name__)

ACCOUNT_PAGE_SIZE = 5


@dataclass(frozen=True)
class InboundMessage:
    """Sender chat identifier and text extracted from a webhook envelope."""

    chat_id: Optional[str]
    text: Optional[str]


@dataclass(frozen=True)
class Reply:
    """Text returned to the channel and the HTTP status to send it with."""

    text: str
    status_code: int = 200


class WebhookDispatcher:
    """Routes inbound messages to the parser, materializer and summaries."""

    def __init__(
        self,
        store: LedgerStore,
        matcher: Optional[CategoryMatcher] = None,
        today: Callable[[], date] = date.today,
    ):
        """Initialize the dispatcher.

        Args:
            store: Ledger store instance
            matcher: Category matcher for free-text messages
            today: Clock used for transaction dates and the monthly report
        """
        self.store = store
        self.matcher = matcher
        self.today = today
        self.materializer = TransactionMaterializer(store, today=today)
        self.summary_service = SummaryService(store)

    def handle(self, message: InboundMessage) -> Reply:
        """Handle one inbound message. Never raises."""
        try:
            return self._handle(message)
        except Exception:
            logger.exception("Error processing message from chat %s", message.chat_id)
            return Reply(replies.INTERNAL_ERROR, status_code=500)

    def load_context(self, owner_id: str) -> OwnerContext:
        """Load the owner's newest accounts and all categories."""
        accounts = self.store.list_accounts(owner_id, limit=ACCOUNT_PAGE_SIZE)
        categories = self.store.list_categories(owner_id)
        return OwnerContext(owner_id=owner_id, accounts=tuple(accounts), categories=tuple(categories))

    def _handle(self, message: InboundMessage) -> Reply:
        text = (message.text or "").strip()
        if not text:
            return Reply(replies.NO_MESSAGE_TEXT, status_code=400)

        logger.info("Received message from chat %s", message.chat_id)

        binding = self.store.find_channel_binding(message.chat_id) if message.chat_id else None
        if binding is None:
            logger.info("Chat %s is not bound to an active owner", message.chat_id)
            return Reply(replies.NOT_CONFIGURED, status_code=400)

        context = self.load_context(binding.owner_id)
        return self._route(parse(text), context)

    def _route(self, intent: Intent, context: OwnerContext) -> Reply:
        if isinstance(intent, AddExpense):
            category = find_expense_category(context.categories, intent.category_hint)
            draft = ExpenseDraft(amount=intent.amount, description=intent.description, category=category)
            return self._materialize(draft, context)
        if isinstance(intent, BalanceQuery):
            return Reply(replies.balance_summary(context.accounts))
        if isinstance(intent, ReportQuery):
            report = self.summary_service.monthly_report(context.owner_id, self.today())
            return Reply(replies.monthly_report(report))
        if isinstance(intent, Help):
            return Reply(replies.HELP_TEXT)
        if isinstance(intent, ParseError):
            return Reply(intent.message)
        if isinstance(intent, Unrecognized):
            result = interpret(intent.text, context.categories, self.matcher)
            if isinstance(result, ParseError):
                return Reply(result.message)
            return self._materialize(result, context)
        raise TypeError(f"Unhandled intent: {intent!r}")

    def _materialize(self, draft: Draft, context: OwnerContext) -> Reply:
        try:
            return Reply(self.materializer.materialize(draft, context))
        except StoreError as exc:
            logger.error("Ledger write failed for owner %s: %s", context.owner_id, exc)
            return Reply(replies.error_message(exc))
        except DomainError as exc:
            return Reply(replies.error_message(exc))
