"""Shared pytest fixtures for finchat tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from finchat.database.factories import create_sqlite_store
from finchat.domain.dispatcher import WebhookDispatcher
from finchat.domain.entities import CategoryType, OwnerContext
from finchat.domain.materializer import TransactionMaterializer
from finchat.domain.transfer import TransferService

TODAY = date(2024, 3, 15)


@pytest.fixture
def temp_db():
    """Create a temporary ledger store for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    # Cleanup
    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def today():
    """Fixed clock for the domain services."""
    return lambda: TODAY


@pytest.fixture
def owner_id():
    return "owner-1"


@pytest.fixture
def sample_account(temp_db, owner_id):
    """Create a checking account with a 1000.00 balance."""
    account_id = temp_db.create_account(
        owner_id=owner_id, name="Conta Corrente", initial_balance=Decimal("1000.00")
    )
    return temp_db.get_account(owner_id, account_id)


@pytest.fixture
def second_account(temp_db, owner_id, sample_account):
    """Create a savings account after the sample account."""
    account_id = temp_db.create_account(
        owner_id=owner_id, name="Poupança", initial_balance=Decimal("200.00")
    )
    return temp_db.get_account(owner_id, account_id)


@pytest.fixture
def sample_categories(temp_db, owner_id):
    """Create the usual categories and return their IDs by name."""
    return {
        "Alimentação": temp_db.create_category(owner_id, "Alimentação", CategoryType.EXPENSE),
        "Transporte": temp_db.create_category(owner_id, "Transporte", CategoryType.EXPENSE),
        "Salário": temp_db.create_category(owner_id, "Salário", CategoryType.INCOME),
    }


@pytest.fixture
def bound_chat(temp_db, owner_id):
    """Bind a chat to the owner and return the chat identifier."""
    temp_db.bind_channel(owner_id=owner_id, channel_chat_id="12345")
    return "12345"


@pytest.fixture
def owner_context(temp_db, owner_id, sample_account, sample_categories):
    """Context as the dispatcher would load it for the owner."""
    return OwnerContext(
        owner_id=owner_id,
        accounts=tuple(temp_db.list_accounts(owner_id, limit=5)),
        categories=tuple(temp_db.list_categories(owner_id)),
    )


@pytest.fixture
def materializer(temp_db, today):
    """Create a TransactionMaterializer with a fixed clock."""
    return TransactionMaterializer(temp_db, today=today)


@pytest.fixture
def transfer_service(temp_db, today):
    """Create a TransferService with a fixed clock."""
    return TransferService(temp_db, today=today)


@pytest.fixture
def dispatcher(temp_db, today):
    """Create a WebhookDispatcher with a fixed clock."""
    return WebhookDispatcher(temp_db, today=today)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
