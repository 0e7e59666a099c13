"""Shared pytest fixtures for tabkeeper tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from tabkeeper.database.factories import create_sqlite_database
from tabkeeper.domain.account import AccountService
from tabkeeper.domain.catalog import CategoryService, ProductService
from tabkeeper.domain.ledger import StockLedgerService
from tabkeeper.domain.note import NoteService
from tabkeeper.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def product_service(temp_db):
    """Create a ProductService with a temporary database."""
    return ProductService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def note_service(temp_db):
    """Create a NoteService with a temporary database."""
    return NoteService(temp_db)


@pytest.fixture
def ledger(temp_db):
    """Create a StockLedgerService with a temporary database."""
    return StockLedgerService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Create a sample waiter."""
    user_id = user_service.create_user(username="waiter", name="Mia Flores")
    return user_service.get_user(user_id)


@pytest.fixture
def sample_category(category_service):
    """Create a sample category."""
    category_id = category_service.create_category(name="Drinks")
    return category_service.get_category(category_id)


@pytest.fixture
def sample_product(product_service, sample_category):
    """Create a product with stock 10 priced at 2.00."""
    product_id = product_service.create_product(
        name="Lemonade", price=Decimal("2.00"), stock=10, category_id=sample_category.id
    )
    return product_service.get_product(product_id)


@pytest.fixture
def sample_account(account_service, sample_user):
    """Open a sample account."""
    account_id = account_service.open_account(user_id=sample_user.id, name="Table 4")
    return account_service.get_account(account_id)


@pytest.fixture
def sample_note(note_service, sample_account, sample_user):
    """Open a sample note on the sample account."""
    note_id = note_service.create_note(account_id=sample_account.id, user_id=sample_user.id)
    return note_service.get_note(note_id)


@pytest.fixture
def stock_of(temp_db):
    """Return a helper that reads the current stock of a product."""

    def _stock_of(product_id: int) -> int:
        return temp_db.get_product(product_id).stock

    return _stock_of


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
