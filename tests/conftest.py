"""Shared pytest fixtures for moneybook tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from moneybook.config import Settings
from moneybook.database.factories import create_sqlite_database
from moneybook.domain.account import AccountService
from moneybook.domain.category import CategoryService, SubCategoryService
from moneybook.domain.movement import MovementService
from moneybook.domain.tiers import TiersService
from moneybook.domain.transfer import TransferService
from moneybook.domain.user import UserService


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
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def sub_category_service(temp_db):
    """Create a SubCategoryService with a temporary database."""
    return SubCategoryService(temp_db)


@pytest.fixture
def tiers_service(temp_db):
    """Create a TiersService with a temporary database."""
    return TiersService(temp_db)


@pytest.fixture
def movement_service(temp_db):
    """Create a MovementService with a temporary database."""
    return MovementService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService with a temporary database."""
    return TransferService(temp_db)


@pytest.fixture
def alice(temp_db):
    """Create a user owning the sample data."""
    user_id = temp_db.create_user(login="alice", password_hash="x")
    return temp_db.get_user(user_id)


@pytest.fixture
def bob(temp_db):
    """Create a second user for cross-user checks."""
    user_id = temp_db.create_user(login="bob", password_hash="x")
    return temp_db.get_user(user_id)


@pytest.fixture
def ledger(temp_db, alice, bob):
    """Create accounts, a counterparty and categories for both users.

    Returns a dict of IDs: alice's checking/savings accounts and
    counterparty, bob's account and counterparty, a category with one
    sub-category and a second category.
    """
    checking = temp_db.create_account(alice.id, "Checking", "First Bank")
    savings = temp_db.create_account(alice.id, "Savings", "First Bank")
    bob_account = temp_db.create_account(bob.id, "Main", "Other Bank")
    grocer = temp_db.create_tiers(alice.id, "Grocer")
    bob_tiers = temp_db.create_tiers(bob.id, "Landlord")
    food = temp_db.create_category("Food")
    groceries = temp_db.create_sub_category("Groceries", food)
    housing = temp_db.create_category("Housing")
    return {
        "checking": checking,
        "savings": savings,
        "bob_account": bob_account,
        "grocer": grocer,
        "bob_tiers": bob_tiers,
        "food": food,
        "groceries": groceries,
        "housing": housing,
    }


@pytest.fixture
def sample_movement(temp_db, ledger):
    """Create a debit movement on alice's checking account."""
    movement_id = temp_db.create_movement(
        date=date(2024, 1, 15),
        account_id=ledger["checking"],
        tiers_id=ledger["grocer"],
        category_id=ledger["food"],
        amount=Decimal("-42.50"),
        type="D",
        sub_category_id=ledger["groceries"],
    )
    return temp_db.get_movement(movement_id)


@pytest.fixture
def movement_payload(ledger):
    """Return a valid movement payload for alice."""
    return {
        "date": "2024-02-01",
        "account_id": ledger["checking"],
        "tiers_id": ledger["grocer"],
        "category_id": ledger["food"],
        "amount": -50,
        "type": "D",
    }


@pytest.fixture
def api_settings(temp_db):
    """Settings pointing at the temporary database."""
    return Settings(database_path=temp_db.database_path, _env_file=None)


@pytest.fixture
def client(temp_db, api_settings):
    """Create an API test client sharing the temporary database."""
    from fastapi.testclient import TestClient

    from moneybook.api.app import create_app

    app = create_app(settings=api_settings, db=temp_db)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Return a helper registering a user and returning auth headers."""

    def _register(login="alice", password="correct-horse"):
        response = client.post("/api/users", json={"login": login, "password": password})
        assert response.status_code == 201, response.text
        response = client.post("/api/users/login", json={"login": login, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
