"""Transfer posting between two accounts of the same user."""

import logging
from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from moneybook.database.base import Database
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.entities import Transfer as TransferEntity
from moneybook.domain.errors import (
    DependencyError,
    ForbiddenError,
    NotFoundError,
    SameAccountConflictError,
    ValidationError,
    category_not_found,
    delete_blocked,
    transfer_not_found,
)
from moneybook.domain.movement import check_presence
from moneybook.domain.ownership import OwnershipResolver, ResourceKind
from moneybook.utils.amount_parser import parse_amount, require_positive
from moneybook.utils.date_parser import parse_iso_date

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("debit_account_id", "credit_account_id", "amount", "date")


@dataclass(frozen=True)
class NormalizedTransfer:
    """A transfer payload that passed validation."""

    debit_account_id: int
    credit_account_id: int
    amount: Decimal
    date: date
    tiers_id: Optional[int] = None
    category_id: Optional[int] = None

    def fields(self) -> dict[str, Any]:
        return asdict(self)


def validate_transfer(payload: Mapping[str, Any]) -> NormalizedTransfer:
    """Validate a transfer payload.

    Steps run in order and the first failure is raised, so two identical
    accounts are reported as a conflict whatever the amount and date are.

    Args:
        payload: Mapping with debit_account_id, credit_account_id, amount,
            date and optionally tiers_id and category_id

    Returns:
        NormalizedTransfer with explicit None for omitted optional fields

    Raises:
        MissingFieldsError: If a required field is absent
        SameAccountConflictError: If both legs are the same account
        InvalidAmountError: If amount is not a positive finite number
        InvalidDateError: If date is not YYYY-MM-DD
    """
    check_presence(payload, REQUIRED_FIELDS)

    debit_account_id = payload["debit_account_id"]
    credit_account_id = payload["credit_account_id"]
    if debit_account_id == credit_account_id:
        raise SameAccountConflictError(
            f"Debit and credit accounts must differ (both are {debit_account_id})"
        )

    amount = require_positive(parse_amount(payload["amount"]))
    transfer_date = parse_iso_date(payload["date"])

    return NormalizedTransfer(
        debit_account_id=debit_account_id,
        credit_account_id=credit_account_id,
        amount=amount,
        date=transfer_date,
        tiers_id=payload.get("tiers_id"),
        category_id=payload.get("category_id"),
    )


def transfer_fields(transfer: TransferEntity) -> dict[str, Any]:
    """Return the editable fields of a stored transfer."""
    return {
        "debit_account_id": transfer.debit_account_id,
        "credit_account_id": transfer.credit_account_id,
        "amount": transfer.amount,
        "date": transfer.date,
        "tiers_id": transfer.tiers_id,
        "category_id": transfer.category_id,
    }


class TransferService:
    """Service for posting and managing transfers."""

    def __init__(self, db: Database, ownership: Optional[OwnershipResolver] = None):
        """Initialize transfer service.

        Args:
            db: Database instance
            ownership: Ownership resolver (built from db if omitted)
        """
        self.db = db
        self.ownership = ownership or OwnershipResolver(db)

    def create_transfer(self, user_id: int, payload: Mapping[str, Any]) -> TransferEntity:
        """Validate and record a transfer between two of the user's accounts.

        Raises:
            ValidationError: If the payload is invalid
            SameAccountConflictError: If both legs are the same account
            ForbiddenError: If either account is not the user's
            NotFoundError: If the category does not exist
        """
        normalized = validate_transfer(payload)
        self._require_both_legs(user_id, normalized)
        self._check_references(user_id, normalized)

        transfer_id = self.db.create_transfer(
            debit_account_id=normalized.debit_account_id,
            credit_account_id=normalized.credit_account_id,
            amount=normalized.amount,
            date=normalized.date,
            tiers_id=normalized.tiers_id,
            category_id=normalized.category_id,
        )
        logger.info(
            "Transfer %s recorded: %s from account %s to account %s",
            transfer_id,
            normalized.amount,
            normalized.debit_account_id,
            normalized.credit_account_id,
        )
        return self._fetch(transfer_id)

    def get_transfer(self, user_id: int, transfer_id: int) -> TransferEntity:
        """Get a transfer with at least one leg on the user's accounts.

        Raises:
            NotFoundError: If the transfer does not exist
            ForbiddenError: If neither leg belongs to the user
        """
        return self.ownership.require(user_id, transfer_id, ResourceKind.TRANSFER)

    def list_transfers(self, user_id: int) -> list[TransferEntity]:
        """List transfers touching at least one of the user's accounts."""
        return self.db.list_transfers(user_id)

    def update_transfer(
        self, user_id: int, transfer_id: int, changes: Mapping[str, Any]
    ) -> TransferEntity:
        """Apply a partial update to a transfer.

        Raises:
            ValidationError: If no fields are given or the merged payload is invalid
            NotFoundError: If the transfer or its category does not exist
            ForbiddenError: If the stored or the new legs are not both the user's
            NotModifiedError: If nothing would change
        """
        if not changes:
            raise ValidationError("No fields to update")

        current = self.ownership.require(user_id, transfer_id, ResourceKind.TRANSFER, write=True)
        current_fields = transfer_fields(current)
        normalized = validate_transfer({**current_fields, **changes})
        DuplicateChecker.ensure_modified(current_fields, normalized.fields())

        self._require_both_legs(user_id, normalized)
        self._check_references(user_id, normalized)

        self.db.update_transfer(
            transfer_id=transfer_id,
            debit_account_id=normalized.debit_account_id,
            credit_account_id=normalized.credit_account_id,
            amount=normalized.amount,
            date=normalized.date,
            tiers_id=normalized.tiers_id,
            category_id=normalized.category_id,
        )
        return self._fetch(transfer_id)

    def delete_transfer(self, user_id: int, transfer_id: int) -> None:
        """Delete a transfer whose both legs the user owns.

        Raises:
            NotFoundError: If the transfer does not exist
            ForbiddenError: If either leg belongs to another user
            DependencyError: If movements still reference the transfer
        """
        self.ownership.require(user_id, transfer_id, ResourceKind.TRANSFER, write=True)

        movement_count = self.db.count_movements(transfer_id=transfer_id)
        if movement_count > 0:
            raise DependencyError(delete_blocked("transfer", transfer_id, {"movement": movement_count}))

        if self.db.delete_transfer(transfer_id) == 0:
            raise NotFoundError(transfer_not_found(transfer_id))

    def _require_both_legs(self, user_id: int, normalized: NormalizedTransfer) -> None:
        legs = [normalized.debit_account_id, normalized.credit_account_id]
        if not self.ownership.owns_accounts(user_id, legs):
            logger.info("User %s denied transfer between accounts %s", user_id, legs)
            raise ForbiddenError("Both accounts of a transfer must belong to the requesting user")

    def _check_references(self, user_id: int, normalized: NormalizedTransfer) -> None:
        if normalized.tiers_id is not None:
            self.ownership.require(user_id, normalized.tiers_id, ResourceKind.TIERS)
        if normalized.category_id is not None and self.db.get_category(normalized.category_id) is None:
            raise NotFoundError(category_not_found(normalized.category_id))

    def _fetch(self, transfer_id: int) -> TransferEntity:
        transfer = self.db.get_transfer(transfer_id)
        if transfer is None:
            raise NotFoundError(transfer_not_found(transfer_id))
        return transfer
