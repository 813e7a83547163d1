"""Tests for duplicate and no-op detection."""

import pytest

from moneybook.config import AccountScope, SubCategoryScope
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.errors import ConflictError, NotModifiedError


class TestAccountScope:
    """Tests for the account uniqueness policy."""

    def test_pair_scope_allows_same_description_at_other_bank(self, temp_db, ledger, alice):
        """Test that the default scope matches on description and bank."""
        checker = DuplicateChecker(temp_db)

        checker.check_account(alice.id, "Checking", "Other Bank")
        with pytest.raises(ConflictError):
            checker.check_account(alice.id, "Checking", "First Bank")

    def test_description_scope(self, temp_db, ledger, alice):
        """Test that the description-only scope ignores the bank."""
        checker = DuplicateChecker(temp_db, account_scope=AccountScope.DESCRIPTION_ONLY)

        with pytest.raises(ConflictError, match="description 'Checking'"):
            checker.check_account(alice.id, "Checking", "Other Bank")

    def test_accounts_are_unique_per_user(self, temp_db, ledger, bob):
        """Test that another user's account never conflicts."""
        DuplicateChecker(temp_db).check_account(bob.id, "Checking", "First Bank")

    def test_exclude_self(self, temp_db, ledger, alice):
        """Test that a record does not conflict with itself on update."""
        DuplicateChecker(temp_db).check_account(
            alice.id, "Checking", "First Bank", exclude_id=ledger["checking"]
        )


class TestSubCategoryScope:
    """Tests for the sub-category uniqueness policy."""

    def test_global_scope(self, temp_db, ledger):
        """Test that names are unique across categories by default."""
        with pytest.raises(ConflictError):
            DuplicateChecker(temp_db).check_sub_category("Groceries", ledger["housing"])

    def test_per_category_scope(self, temp_db, ledger):
        """Test that names only clash within the same category."""
        checker = DuplicateChecker(temp_db, sub_category_scope=SubCategoryScope.PER_CATEGORY)

        checker.check_sub_category("Groceries", ledger["housing"])
        with pytest.raises(ConflictError, match="in category"):
            checker.check_sub_category("Groceries", ledger["food"])


def test_check_category(temp_db, ledger):
    """Test that category names are globally unique."""
    checker = DuplicateChecker(temp_db)
    with pytest.raises(ConflictError):
        checker.check_category("Food")
    checker.check_category("Food", exclude_id=ledger["food"])


def test_check_tiers(temp_db, ledger, alice, bob):
    """Test that counterparty names are unique per user."""
    checker = DuplicateChecker(temp_db)
    with pytest.raises(ConflictError):
        checker.check_tiers(alice.id, "Grocer")
    checker.check_tiers(bob.id, "Grocer")


class TestEnsureModified:
    """Tests for no-op detection."""

    def test_identical_values_raise(self):
        """Test that an update repeating the stored values is rejected."""
        with pytest.raises(NotModifiedError):
            DuplicateChecker.ensure_modified({"name": "Food", "id": 1}, {"name": "Food"})

    def test_any_difference_passes(self):
        """Test that one changed field is enough."""
        DuplicateChecker.ensure_modified(
            {"description": "Checking", "bank_name": "A"},
            {"description": "Checking", "bank_name": "B"},
        )
