"""Abstract database interface.

This is the persistence gateway: every method either returns domain
entities, the inserted ID, or the number of affected rows. Storage-level
failures surface as ``StorageError`` and carry no business meaning.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from moneybook.domain.entities import (
    User,
    Account,
    Category,
    SubCategory,
    Tiers,
    Movement,
    Transfer,
)


class Database(ABC):
    """Abstract database interface for moneybook."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User / credential operations
    @abstractmethod
    def create_user(self, login: str, password_hash: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_login(self, login: str) -> Optional[User]:
        """Get user by login."""
        pass

    @abstractmethod
    def get_password_hash(self, user_id: int) -> Optional[str]:
        """Get the stored password hash of a user."""
        pass

    @abstractmethod
    def get_user_by_token_hash(self, token_hash: str) -> Optional[User]:
        """Get the user currently holding the given token hash."""
        pass

    @abstractmethod
    def set_user_token(
        self, user_id: int, token_hash: Optional[str], expires_at: Optional[datetime]
    ) -> int:
        """Store (or clear) a user's token hash. Returns affected row count."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, user_id: int, description: str, bank_name: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: int) -> list[Account]:
        """List the accounts owned by a user."""
        pass

    @abstractmethod
    def count_owned_accounts(self, user_id: int, account_ids: list[int]) -> int:
        """Count how many of the given account IDs belong to the user."""
        pass

    @abstractmethod
    def account_exists(
        self,
        user_id: int,
        description: str,
        bank_name: Optional[str] = None,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """Check if the user has an account with this description.

        When bank_name is given the match is on the (description, bank_name)
        pair, otherwise on the description alone.
        """
        pass

    @abstractmethod
    def update_account(self, account_id: int, description: str, bank_name: str) -> int:
        """Update account fields. Returns affected row count."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> int:
        """Delete an account. Returns affected row count."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, name: str) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(self) -> list[Category]:
        """List all categories."""
        pass

    @abstractmethod
    def category_name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        """Check if a category with this name exists."""
        pass

    @abstractmethod
    def update_category(self, category_id: int, name: str) -> int:
        """Rename a category. Returns affected row count."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> int:
        """Delete a category. Returns affected row count."""
        pass

    # Sub-category operations
    @abstractmethod
    def create_sub_category(self, name: str, category_id: int) -> int:
        """Create a sub-category. Returns sub-category ID."""
        pass

    @abstractmethod
    def get_sub_category(self, sub_category_id: int) -> Optional[SubCategory]:
        """Get sub-category by ID."""
        pass

    @abstractmethod
    def list_sub_categories(self, category_id: Optional[int] = None) -> list[SubCategory]:
        """List sub-categories, optionally filtered by parent."""
        pass

    @abstractmethod
    def sub_category_name_exists(
        self, name: str, category_id: Optional[int] = None, exclude_id: Optional[int] = None
    ) -> bool:
        """Check if a sub-category with this name exists.

        When category_id is given only that parent's sub-categories are scanned.
        """
        pass

    @abstractmethod
    def update_sub_category(self, sub_category_id: int, name: str, category_id: int) -> int:
        """Update a sub-category. Returns affected row count."""
        pass

    @abstractmethod
    def delete_sub_category(self, sub_category_id: int) -> int:
        """Delete a sub-category. Returns affected row count."""
        pass

    # Counterparty operations
    @abstractmethod
    def create_tiers(self, user_id: int, name: str) -> int:
        """Create a counterparty. Returns counterparty ID."""
        pass

    @abstractmethod
    def get_tiers(self, tiers_id: int) -> Optional[Tiers]:
        """Get counterparty by ID."""
        pass

    @abstractmethod
    def list_tiers(self, user_id: int) -> list[Tiers]:
        """List the counterparties owned by a user."""
        pass

    @abstractmethod
    def tiers_name_exists(self, user_id: int, name: str, exclude_id: Optional[int] = None) -> bool:
        """Check if the user already has a counterparty with this name."""
        pass

    @abstractmethod
    def update_tiers(self, tiers_id: int, name: str) -> int:
        """Rename a counterparty. Returns affected row count."""
        pass

    @abstractmethod
    def delete_tiers(self, tiers_id: int) -> int:
        """Delete a counterparty. Returns affected row count."""
        pass

    # Movement operations
    @abstractmethod
    def create_movement(
        self,
        date: date,
        account_id: int,
        tiers_id: int,
        category_id: int,
        amount: Decimal,
        type: str,
        sub_category_id: Optional[int] = None,
        transfer_id: Optional[int] = None,
    ) -> int:
        """Create a movement. Returns movement ID."""
        pass

    @abstractmethod
    def get_movement(self, movement_id: int) -> Optional[Movement]:
        """Get movement by ID."""
        pass

    @abstractmethod
    def list_movements(
        self,
        user_id: int,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Movement]:
        """List movements across the accounts of a user.

        Args:
            user_id: Owner of the accounts to scan
            account_id: Optional account ID filter
            category_id: Optional category ID filter
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
        """
        pass

    @abstractmethod
    def update_movement(
        self,
        movement_id: int,
        date: date,
        account_id: int,
        tiers_id: int,
        category_id: int,
        amount: Decimal,
        type: str,
        sub_category_id: Optional[int] = None,
        transfer_id: Optional[int] = None,
    ) -> int:
        """Replace all fields of a movement. Returns affected row count."""
        pass

    @abstractmethod
    def delete_movement(self, movement_id: int) -> int:
        """Delete a movement. Returns affected row count."""
        pass

    @abstractmethod
    def count_movements(
        self,
        account_id: Optional[int] = None,
        tiers_id: Optional[int] = None,
        category_id: Optional[int] = None,
        sub_category_id: Optional[int] = None,
        transfer_id: Optional[int] = None,
    ) -> int:
        """Count movements matching every given filter."""
        pass

    # Transfer operations
    @abstractmethod
    def create_transfer(
        self,
        debit_account_id: int,
        credit_account_id: int,
        amount: Decimal,
        date: date,
        tiers_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Create a transfer. Returns transfer ID."""
        pass

    @abstractmethod
    def get_transfer(self, transfer_id: int) -> Optional[Transfer]:
        """Get transfer by ID."""
        pass

    @abstractmethod
    def list_transfers(self, user_id: int) -> list[Transfer]:
        """List transfers with at least one leg on an account of the user."""
        pass

    @abstractmethod
    def update_transfer(
        self,
        transfer_id: int,
        debit_account_id: int,
        credit_account_id: int,
        amount: Decimal,
        date: date,
        tiers_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Replace all fields of a transfer. Returns affected row count."""
        pass

    @abstractmethod
    def delete_transfer(self, transfer_id: int) -> int:
        """Delete a transfer. Returns affected row count."""
        pass

    @abstractmethod
    def count_transfers(
        self,
        account_id: Optional[int] = None,
        tiers_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> int:
        """Count transfers matching every given filter.

        account_id matches either the debit or the credit leg.
        """
        pass
