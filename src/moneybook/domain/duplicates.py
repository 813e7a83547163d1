"""Uniqueness and no-op detection ahead of any write."""

import logging
from typing import Any, Mapping, Optional

from moneybook.config import AccountScope, SubCategoryScope
from moneybook.database.base import Database
from moneybook.domain.errors import ConflictError, NotModifiedError

logger = logging.getLogger(__name__)


class DuplicateChecker:
    """Apply per-resource uniqueness rules before mutating state.

    The scope of account and sub-category uniqueness varies between
    deployments, so both are injected as policies rather than fixed here.
    On update, callers pass the record's own ID as ``exclude_id`` so the
    record never conflicts with itself.
    """

    def __init__(
        self,
        db: Database,
        account_scope: AccountScope = AccountScope.DESCRIPTION_AND_BANK,
        sub_category_scope: SubCategoryScope = SubCategoryScope.GLOBAL,
    ):
        """Initialize duplicate checker.

        Args:
            db: Database instance
            account_scope: Fields an account must be unique on, per user
            sub_category_scope: Whether sub-category names are unique globally
                or only within their parent category
        """
        self.db = db
        self.account_scope = account_scope
        self.sub_category_scope = sub_category_scope

    def check_category(self, name: str, exclude_id: Optional[int] = None) -> None:
        """Raise ConflictError if another category already uses this name."""
        if self.db.category_name_exists(name, exclude_id=exclude_id):
            raise ConflictError(f"Category with name '{name}' already exists")

    def check_sub_category(
        self, name: str, category_id: int, exclude_id: Optional[int] = None
    ) -> None:
        """Raise ConflictError if the name is taken within the configured scope."""
        scope_id = category_id if self.sub_category_scope is SubCategoryScope.PER_CATEGORY else None
        if self.db.sub_category_name_exists(name, category_id=scope_id, exclude_id=exclude_id):
            if scope_id is None:
                raise ConflictError(f"Sub-category with name '{name}' already exists")
            raise ConflictError(
                f"Sub-category with name '{name}' already exists in category {category_id}"
            )

    def check_tiers(self, user_id: int, name: str, exclude_id: Optional[int] = None) -> None:
        """Raise ConflictError if the user already has a counterparty with this name."""
        if self.db.tiers_name_exists(user_id, name, exclude_id=exclude_id):
            raise ConflictError(f"Counterparty with name '{name}' already exists")

    def check_account(
        self,
        user_id: int,
        description: str,
        bank_name: str,
        exclude_id: Optional[int] = None,
    ) -> None:
        """Raise ConflictError if the user already has a matching account."""
        if self.account_scope is AccountScope.DESCRIPTION_ONLY:
            if self.db.account_exists(user_id, description, exclude_id=exclude_id):
                raise ConflictError(f"Account with description '{description}' already exists")
            return

        if self.db.account_exists(user_id, description, bank_name=bank_name, exclude_id=exclude_id):
            raise ConflictError(
                f"Account with description '{description}' at bank '{bank_name}' already exists"
            )

    @staticmethod
    def ensure_modified(current: Mapping[str, Any], proposed: Mapping[str, Any]) -> None:
        """Raise NotModifiedError when the proposed values match the persisted ones.

        Only keys present in ``proposed`` are compared; both sides must
        already be normalized (stripped names, parsed dates and amounts).
        """
        if all(current.get(key) == value for key, value in proposed.items()):
            logger.debug("Update is a no-op: %s", sorted(proposed))
            raise NotModifiedError("No modification detected")
