"""Tests for the counterparty service."""

from decimal import Decimal

import pytest

from moneybook.domain.errors import (
    ConflictError,
    DependencyError,
    ForbiddenError,
    MissingFieldsError,
    NotFoundError,
    NotModifiedError,
)


def test_create_tiers(tiers_service, alice):
    """Test creating a counterparty."""
    tiers = tiers_service.create_tiers(alice.id, " Bakery ")
    assert tiers.name == "Bakery"
    assert tiers.user_id == alice.id


def test_create_tiers_blank(tiers_service, alice):
    """Test that a name is required."""
    with pytest.raises(MissingFieldsError):
        tiers_service.create_tiers(alice.id, "")


def test_names_unique_per_user(tiers_service, ledger, alice, bob):
    """Test that names clash only within one user."""
    with pytest.raises(ConflictError):
        tiers_service.create_tiers(alice.id, "Grocer")
    assert tiers_service.create_tiers(bob.id, "Grocer").user_id == bob.id


def test_list_tiers_scoped(tiers_service, ledger, alice):
    """Test that only the user's counterparties are listed."""
    assert [t.name for t in tiers_service.list_tiers(alice.id)] == ["Grocer"]


def test_get_tiers_of_other_user(tiers_service, ledger, alice):
    """Test that another user's counterparty is forbidden."""
    with pytest.raises(ForbiddenError):
        tiers_service.get_tiers(alice.id, ledger["bob_tiers"])


def test_rename_tiers(tiers_service, ledger, alice):
    """Test renaming a counterparty."""
    assert tiers_service.update_tiers(alice.id, ledger["grocer"], "Supermarket").name == "Supermarket"


def test_rename_tiers_not_modified(tiers_service, ledger, alice):
    """Test that the same name is NotModified."""
    with pytest.raises(NotModifiedError):
        tiers_service.update_tiers(alice.id, ledger["grocer"], "Grocer")


def test_delete_referenced_tiers_keeps_it(tiers_service, sample_movement, ledger, alice, temp_db):
    """Test that a counterparty used by a movement is not deleted."""
    with pytest.raises(DependencyError) as exc_info:
        tiers_service.delete_tiers(alice.id, ledger["grocer"])

    assert exc_info.value.status_code == 409
    assert temp_db.get_tiers(ledger["grocer"]) is not None


def test_delete_tiers_referenced_by_transfer(tiers_service, transfer_service, ledger, alice):
    """Test that a counterparty tagged on a transfer is not deleted."""
    transfer_service.create_transfer(
        alice.id,
        {
            "debit_account_id": ledger["checking"],
            "credit_account_id": ledger["savings"],
            "amount": Decimal("5"),
            "date": "2024-01-01",
            "tiers_id": ledger["grocer"],
        },
    )
    with pytest.raises(DependencyError, match="transfer"):
        tiers_service.delete_tiers(alice.id, ledger["grocer"])


def test_delete_tiers(tiers_service, ledger, alice, temp_db):
    """Test deleting an unused counterparty."""
    tiers_service.delete_tiers(alice.id, ledger["grocer"])
    assert temp_db.get_tiers(ledger["grocer"]) is None


def test_delete_missing_tiers(tiers_service, alice):
    """Test deleting an unknown counterparty."""
    with pytest.raises(NotFoundError):
        tiers_service.delete_tiers(alice.id, 9999)
