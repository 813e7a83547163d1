"""Ownership resolution: may a user read or write a given resource?"""

import logging
from enum import Enum
from typing import Optional, Union

from moneybook.database.base import Database
from moneybook.domain.entities import Account, Movement, Tiers, Transfer
from moneybook.domain.errors import ForbiddenError, NotFoundError

logger = logging.getLogger(__name__)


class Ownership(Enum):
    """Outcome of an ownership lookup."""

    OWNED = "owned"
    NOT_OWNED = "not_owned"
    NOT_FOUND = "not_found"


class ResourceKind(str, Enum):
    """Resources whose access is scoped to their owner."""

    ACCOUNT = "account"
    TIERS = "counterparty"
    MOVEMENT = "movement"
    TRANSFER = "transfer"


Resource = Union[Account, Tiers, Movement, Transfer]


class OwnershipResolver:
    """Resolve whether a user owns accounts, counterparties, movements and transfers.

    Lookups are pure reads against the account/user directory. ``resolve``
    reports the outcome as an ``Ownership`` value; ``require`` turns a
    negative outcome into ``NotFoundError`` or ``ForbiddenError`` and hands
    back the fetched entity.
    """

    def __init__(self, db: Database):
        """Initialize ownership resolver.

        Args:
            db: Database instance
        """
        self.db = db

    def resolve(
        self, user_id: int, resource_id: int, kind: ResourceKind, write: bool = False
    ) -> Ownership:
        """Resolve the ownership of a resource.

        Args:
            user_id: Requesting user
            resource_id: ID of the resource
            kind: Resource kind
            write: For transfers, require both legs instead of one

        Returns:
            Ownership outcome
        """
        ownership, _ = self._lookup(user_id, resource_id, kind, write)
        return ownership

    def require(
        self, user_id: int, resource_id: int, kind: ResourceKind, write: bool = False
    ) -> Resource:
        """Return the resource if the user owns it.

        Raises:
            NotFoundError: If the resource does not exist
            ForbiddenError: If the resource belongs to another user
        """
        ownership, resource = self._lookup(user_id, resource_id, kind, write)
        if ownership is Ownership.NOT_FOUND:
            raise NotFoundError(f"{kind.value.capitalize()} {resource_id} not found")
        if ownership is Ownership.NOT_OWNED:
            logger.info("User %s denied access to %s %s", user_id, kind.value, resource_id)
            raise ForbiddenError(f"Access to {kind.value} {resource_id} is forbidden")
        return resource

    def owns_accounts(self, user_id: int, account_ids: list[int]) -> bool:
        """Check in one query that every given account belongs to the user."""
        wanted = set(account_ids)
        return self.db.count_owned_accounts(user_id, list(wanted)) == len(wanted)

    def _lookup(
        self, user_id: int, resource_id: int, kind: ResourceKind, write: bool
    ) -> tuple[Ownership, Optional[Resource]]:
        if kind is ResourceKind.ACCOUNT:
            account = self.db.get_account(resource_id)
            if account is None:
                return Ownership.NOT_FOUND, None
            return _owned_if(account.user_id == user_id), account

        if kind is ResourceKind.TIERS:
            tiers = self.db.get_tiers(resource_id)
            if tiers is None:
                return Ownership.NOT_FOUND, None
            return _owned_if(tiers.user_id == user_id), tiers

        if kind is ResourceKind.MOVEMENT:
            movement = self.db.get_movement(resource_id)
            if movement is None:
                return Ownership.NOT_FOUND, None
            account = self.db.get_account(movement.account_id)
            return _owned_if(account is not None and account.user_id == user_id), movement

        if kind is ResourceKind.TRANSFER:
            transfer = self.db.get_transfer(resource_id)
            if transfer is None:
                return Ownership.NOT_FOUND, None
            legs = [transfer.debit_account_id, transfer.credit_account_id]
            owned = self.db.count_owned_accounts(user_id, legs)
            needed = len(set(legs)) if write else 1
            return _owned_if(owned >= needed), transfer

        raise ValueError(f"Unknown resource kind: {kind}")


def _owned_if(condition: bool) -> Ownership:
    return Ownership.OWNED if condition else Ownership.NOT_OWNED
