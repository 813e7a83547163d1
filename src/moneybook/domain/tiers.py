"""Counterparty ("tiers") domain service."""

from typing import Any, Optional

from moneybook.database.base import Database
from moneybook.domain.category import clean_name
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.entities import Tiers as TiersEntity
from moneybook.domain.errors import DependencyError, NotFoundError, delete_blocked, tiers_not_found
from moneybook.domain.ownership import OwnershipResolver, ResourceKind


class TiersService:
    """Service for managing a user's counterparties."""

    def __init__(
        self,
        db: Database,
        ownership: Optional[OwnershipResolver] = None,
        duplicates: Optional[DuplicateChecker] = None,
    ):
        """Initialize counterparty service.

        Args:
            db: Database instance
            ownership: Ownership resolver (built from db if omitted)
            duplicates: Duplicate checker (built from db if omitted)
        """
        self.db = db
        self.ownership = ownership or OwnershipResolver(db)
        self.duplicates = duplicates or DuplicateChecker(db)

    def create_tiers(self, user_id: int, name: Any) -> TiersEntity:
        """Create a counterparty for the user.

        Raises:
            MissingFieldsError: If name is missing or blank
            ConflictError: If the user already has a counterparty with this name
        """
        name = clean_name(name)
        self.duplicates.check_tiers(user_id, name)
        tiers_id = self.db.create_tiers(user_id=user_id, name=name)
        return self._fetch(tiers_id)

    def get_tiers(self, user_id: int, tiers_id: int) -> TiersEntity:
        """Get one of the user's counterparties.

        Raises:
            NotFoundError: If the counterparty does not exist
            ForbiddenError: If it belongs to another user
        """
        return self.ownership.require(user_id, tiers_id, ResourceKind.TIERS)

    def list_tiers(self, user_id: int) -> list[TiersEntity]:
        """List the user's counterparties, ordered by name."""
        return self.db.list_tiers(user_id)

    def update_tiers(self, user_id: int, tiers_id: int, name: Any) -> TiersEntity:
        """Rename a counterparty.

        Raises:
            MissingFieldsError: If name is missing or blank
            NotFoundError: If the counterparty does not exist
            ForbiddenError: If it belongs to another user
            NotModifiedError: If the name is unchanged
            ConflictError: If the user already has another counterparty with this name
        """
        current = self.ownership.require(user_id, tiers_id, ResourceKind.TIERS)
        name = clean_name(name)
        DuplicateChecker.ensure_modified({"name": current.name}, {"name": name})
        self.duplicates.check_tiers(user_id, name, exclude_id=tiers_id)

        if self.db.update_tiers(tiers_id, name) == 0:
            raise NotFoundError(tiers_not_found(tiers_id))
        return self._fetch(tiers_id)

    def delete_tiers(self, user_id: int, tiers_id: int) -> None:
        """Delete a counterparty nothing references.

        Raises:
            NotFoundError: If the counterparty does not exist
            ForbiddenError: If it belongs to another user
            DependencyError: If movements or transfers reference it
        """
        self.ownership.require(user_id, tiers_id, ResourceKind.TIERS)

        dependents = {
            "movement": self.db.count_movements(tiers_id=tiers_id),
            "transfer": self.db.count_transfers(tiers_id=tiers_id),
        }
        if any(dependents.values()):
            raise DependencyError(delete_blocked("counterparty", tiers_id, dependents))

        if self.db.delete_tiers(tiers_id) == 0:
            raise NotFoundError(tiers_not_found(tiers_id))

    def _fetch(self, tiers_id: int) -> TiersEntity:
        tiers = self.db.get_tiers(tiers_id)
        if tiers is None:
            raise NotFoundError(tiers_not_found(tiers_id))
        return tiers
