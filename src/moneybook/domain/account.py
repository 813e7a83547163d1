"""Account domain service."""

from typing import Any, Mapping, Optional

from moneybook.database.base import Database
from moneybook.domain.category import clean_name
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.entities import Account as AccountEntity
from moneybook.domain.errors import (
    DependencyError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
    account_not_found,
    delete_blocked,
)
from moneybook.domain.ownership import OwnershipResolver, ResourceKind

ACCOUNT_FIELDS = ("description", "bank_name")


class AccountService:
    """Service for managing a user's accounts."""

    def __init__(
        self,
        db: Database,
        ownership: Optional[OwnershipResolver] = None,
        duplicates: Optional[DuplicateChecker] = None,
    ):
        """Initialize account service.

        Args:
            db: Database instance
            ownership: Ownership resolver (built from db if omitted)
            duplicates: Duplicate checker (built from db if omitted)
        """
        self.db = db
        self.ownership = ownership or OwnershipResolver(db)
        self.duplicates = duplicates or DuplicateChecker(db)

    def create_account(self, user_id: int, description: Any, bank_name: Any) -> AccountEntity:
        """Create a new account for the user.

        Args:
            user_id: Owning user
            description: Account description
            bank_name: Bank name

        Returns:
            Created account entity

        Raises:
            MissingFieldsError: If description or bank name is missing or blank
            ConflictError: If the user already has a matching account
        """
        values = _clean_fields({"description": description, "bank_name": bank_name})
        self.duplicates.check_account(user_id, values["description"], values["bank_name"])

        account_id = self.db.create_account(
            user_id=user_id,
            description=values["description"],
            bank_name=values["bank_name"],
        )
        return self._fetch(account_id)

    def get_account(self, user_id: int, account_id: int) -> AccountEntity:
        """Get one of the user's accounts.

        Raises:
            NotFoundError: If the account does not exist
            ForbiddenError: If it belongs to another user
        """
        return self.ownership.require(user_id, account_id, ResourceKind.ACCOUNT)

    def list_accounts(self, user_id: int) -> list[AccountEntity]:
        """List the user's accounts."""
        return self.db.list_accounts(user_id)

    def update_account(
        self, user_id: int, account_id: int, changes: Mapping[str, Any]
    ) -> AccountEntity:
        """Apply a partial update to an account.

        Args:
            user_id: Requesting user
            account_id: Account to update
            changes: Subset of description and bank_name

        Raises:
            ValidationError: If no fields are given
            MissingFieldsError: If a given field is blank
            NotFoundError: If the account does not exist
            ForbiddenError: If it belongs to another user
            NotModifiedError: If nothing would change
            ConflictError: If the user already has a matching account
        """
        changes = {key: value for key, value in changes.items() if key in ACCOUNT_FIELDS}
        if not changes:
            raise ValidationError("No fields to update")

        current = self.ownership.require(user_id, account_id, ResourceKind.ACCOUNT)
        proposed = _clean_fields(changes)
        DuplicateChecker.ensure_modified(
            {"description": current.description, "bank_name": current.bank_name}, proposed
        )

        merged = {"description": current.description, "bank_name": current.bank_name, **proposed}
        self.duplicates.check_account(
            user_id, merged["description"], merged["bank_name"], exclude_id=account_id
        )

        if self.db.update_account(account_id, merged["description"], merged["bank_name"]) == 0:
            raise NotFoundError(account_not_found(account_id))
        return self._fetch(account_id)

    def delete_account(self, user_id: int, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            ForbiddenError: If it belongs to another user
            DependencyError: If movements or transfers reference it
        """
        self.ownership.require(user_id, account_id, ResourceKind.ACCOUNT)

        dependents = {
            "movement": self.db.count_movements(account_id=account_id),
            "transfer": self.db.count_transfers(account_id=account_id),
        }
        if any(dependents.values()):
            raise DependencyError(delete_blocked("account", account_id, dependents))

        if self.db.delete_account(account_id) == 0:
            raise NotFoundError(account_not_found(account_id))

    def _fetch(self, account_id: int) -> AccountEntity:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account


def _clean_fields(values: Mapping[str, Any]) -> dict[str, str]:
    """Strip every given field, collecting all missing ones into one error."""
    cleaned = {}
    missing = []
    for field, value in values.items():
        try:
            cleaned[field] = clean_name(value, field)
        except MissingFieldsError:
            missing.append(field)
    if missing:
        raise MissingFieldsError(missing)
    return cleaned
