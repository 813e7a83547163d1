"""Movement posting: validation, sign normalization and the movement service."""

import logging
from dataclasses import dataclass, asdict
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from moneybook.database.base import Database
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.entities import Movement as MovementEntity, MovementType
from moneybook.domain.errors import (
    InvalidTypeError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
    category_not_found,
    movement_not_found,
    sub_category_not_found,
)
from moneybook.domain.ownership import OwnershipResolver, ResourceKind
from moneybook.utils.amount_parser import parse_amount, require_non_zero
from moneybook.utils.date_parser import parse_iso_date

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("date", "account_id", "tiers_id", "category_id", "amount", "type")

_TYPE_LABELS = {MovementType.DEBIT: "debit", MovementType.CREDIT: "credit"}


@dataclass(frozen=True)
class NormalizedMovement:
    """A movement payload that passed validation, with its sign corrected."""

    date: date
    account_id: int
    tiers_id: int
    category_id: int
    amount: Decimal
    type: MovementType
    sub_category_id: Optional[int] = None
    transfer_id: Optional[int] = None
    advisory: Optional[str] = None

    def fields(self) -> dict[str, Any]:
        """Return the persistable fields (everything but the advisory)."""
        data = asdict(self)
        data.pop("advisory")
        return data


@dataclass(frozen=True)
class MovementResult:
    """A stored movement plus the sign-correction advisory, if any."""

    movement: MovementEntity
    advisory: Optional[str] = None


def check_presence(payload: Mapping[str, Any], required: tuple[str, ...]) -> None:
    """Raise MissingFieldsError naming every required field that is absent or null."""
    missing = [field for field in required if payload.get(field) is None]
    if missing:
        raise MissingFieldsError(missing)


def parse_movement_type(value: Any) -> MovementType:
    """Accept exactly "D" or "C"."""
    try:
        return MovementType(value)
    except ValueError:
        raise InvalidTypeError(
            f"Movement type must be 'D' (debit) or 'C' (credit), got {value!r}"
        ) from None


def normalize_sign(amount: Decimal, movement_type: MovementType) -> tuple[Decimal, Optional[str]]:
    """Make the amount sign agree with the movement type.

    Debits carry non-positive amounts and credits non-negative ones. A
    mismatched amount is negated and an advisory message is returned
    alongside it; a matching amount passes unchanged with no advisory.
    """
    mismatched = (movement_type is MovementType.DEBIT and amount > 0) or (
        movement_type is MovementType.CREDIT and amount < 0
    )
    if not mismatched:
        return amount, None

    corrected = -amount
    advisory = (
        f"Amount sign corrected from {amount} to {corrected} "
        f"for {_TYPE_LABELS[movement_type]} movement"
    )
    return corrected, advisory


def validate_movement(payload: Mapping[str, Any]) -> NormalizedMovement:
    """Validate a movement payload and normalize its amount.

    Steps run in order and the first failure is raised: presence of the
    required fields, the type tag, a finite non-zero amount, an ISO date,
    then sign normalization (which never fails).

    Args:
        payload: Mapping with date, account_id, tiers_id, category_id,
            amount, type and optionally sub_category_id and transfer_id

    Returns:
        NormalizedMovement ready for persistence

    Raises:
        MissingFieldsError: If a required field is absent
        InvalidTypeError: If type is not "D" or "C"
        InvalidAmountError: If amount is not a finite non-zero number
        InvalidDateError: If date is not YYYY-MM-DD
    """
    check_presence(payload, REQUIRED_FIELDS)
    movement_type = parse_movement_type(payload["type"])
    amount = require_non_zero(parse_amount(payload["amount"]))
    movement_date = parse_iso_date(payload["date"])
    amount, advisory = normalize_sign(amount, movement_type)

    return NormalizedMovement(
        date=movement_date,
        account_id=payload["account_id"],
        tiers_id=payload["tiers_id"],
        category_id=payload["category_id"],
        amount=amount,
        type=movement_type,
        sub_category_id=payload.get("sub_category_id"),
        transfer_id=payload.get("transfer_id"),
        advisory=advisory,
    )


def movement_fields(movement: MovementEntity) -> dict[str, Any]:
    """Return the editable fields of a stored movement."""
    return {
        "date": movement.date,
        "account_id": movement.account_id,
        "tiers_id": movement.tiers_id,
        "category_id": movement.category_id,
        "amount": movement.amount,
        "type": movement.type,
        "sub_category_id": movement.sub_category_id,
        "transfer_id": movement.transfer_id,
    }


class MovementService:
    """Service for posting and managing movements."""

    def __init__(self, db: Database, ownership: Optional[OwnershipResolver] = None):
        """Initialize movement service.

        Args:
            db: Database instance
            ownership: Ownership resolver (built from db if omitted)
        """
        self.db = db
        self.ownership = ownership or OwnershipResolver(db)

    def create_movement(self, user_id: int, payload: Mapping[str, Any]) -> MovementResult:
        """Validate and post a movement on one of the user's accounts.

        Args:
            user_id: Requesting user
            payload: Movement fields (see validate_movement)

        Returns:
            MovementResult with the stored movement and optional advisory

        Raises:
            ValidationError: If the payload is invalid
            ForbiddenError: If the account or counterparty belongs to another user
            NotFoundError: If a referenced entity does not exist
        """
        normalized = validate_movement(payload)
        self.ownership.require(user_id, normalized.account_id, ResourceKind.ACCOUNT)
        self._check_references(user_id, normalized)

        movement_id = self.db.create_movement(
            date=normalized.date,
            account_id=normalized.account_id,
            tiers_id=normalized.tiers_id,
            category_id=normalized.category_id,
            amount=normalized.amount,
            type=normalized.type.value,
            sub_category_id=normalized.sub_category_id,
            transfer_id=normalized.transfer_id,
        )
        if normalized.advisory:
            logger.info("Movement %s: %s", movement_id, normalized.advisory)
        return MovementResult(movement=self._fetch(movement_id), advisory=normalized.advisory)

    def get_movement(self, user_id: int, movement_id: int) -> MovementEntity:
        """Get a movement the user owns through its account.

        Raises:
            NotFoundError: If the movement does not exist
            ForbiddenError: If its account belongs to another user
        """
        return self.ownership.require(user_id, movement_id, ResourceKind.MOVEMENT)

    def list_movements(
        self,
        user_id: int,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[MovementEntity]:
        """List movements across the user's accounts.

        Args:
            user_id: Requesting user
            account_id: Optional account filter; must be owned by the user
            category_id: Optional category filter
            start_date: Optional start date filter
            end_date: Optional end date filter

        Returns:
            List of movement entities, newest first
        """
        if account_id is not None:
            self.ownership.require(user_id, account_id, ResourceKind.ACCOUNT)
        return self.db.list_movements(
            user_id=user_id,
            account_id=account_id,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
        )

    def update_movement(
        self, user_id: int, movement_id: int, changes: Mapping[str, Any]
    ) -> MovementResult:
        """Apply a partial update to a movement.

        The changes are merged onto the stored movement and the merged
        payload is validated again, so changing the type re-signs the amount.

        Raises:
            ValidationError: If no fields are given or the merged payload is invalid
            NotFoundError: If the movement or a referenced entity does not exist
            ForbiddenError: If the movement or the new account belongs to another user
            NotModifiedError: If nothing would change
        """
        if not changes:
            raise ValidationError("No fields to update")

        current = self.ownership.require(user_id, movement_id, ResourceKind.MOVEMENT)
        current_fields = movement_fields(current)
        normalized = validate_movement({**current_fields, **changes})
        DuplicateChecker.ensure_modified(current_fields, normalized.fields())

        if normalized.account_id != current.account_id:
            self.ownership.require(user_id, normalized.account_id, ResourceKind.ACCOUNT)
        self._check_references(user_id, normalized)

        self.db.update_movement(
            movement_id=movement_id,
            date=normalized.date,
            account_id=normalized.account_id,
            tiers_id=normalized.tiers_id,
            category_id=normalized.category_id,
            amount=normalized.amount,
            type=normalized.type.value,
            sub_category_id=normalized.sub_category_id,
            transfer_id=normalized.transfer_id,
        )
        if normalized.advisory:
            logger.info("Movement %s: %s", movement_id, normalized.advisory)
        return MovementResult(movement=self._fetch(movement_id), advisory=normalized.advisory)

    def delete_movement(self, user_id: int, movement_id: int) -> None:
        """Delete a movement the user owns.

        Raises:
            NotFoundError: If the movement does not exist
            ForbiddenError: If its account belongs to another user
        """
        self.ownership.require(user_id, movement_id, ResourceKind.MOVEMENT)
        if self.db.delete_movement(movement_id) == 0:
            raise NotFoundError(movement_not_found(movement_id))

    def _check_references(self, user_id: int, normalized: NormalizedMovement) -> None:
        self.ownership.require(user_id, normalized.tiers_id, ResourceKind.TIERS)

        if self.db.get_category(normalized.category_id) is None:
            raise NotFoundError(category_not_found(normalized.category_id))

        if normalized.sub_category_id is not None:
            sub_category = self.db.get_sub_category(normalized.sub_category_id)
            if sub_category is None:
                raise NotFoundError(sub_category_not_found(normalized.sub_category_id))
            if sub_category.category_id != normalized.category_id:
                raise ValidationError(
                    f"Sub-category {normalized.sub_category_id} does not belong to "
                    f"category {normalized.category_id}"
                )

        if normalized.transfer_id is not None:
            self.ownership.require(user_id, normalized.transfer_id, ResourceKind.TRANSFER)

    def _fetch(self, movement_id: int) -> MovementEntity:
        movement = self.db.get_movement(movement_id)
        if movement is None:
            raise NotFoundError(movement_not_found(movement_id))
        return movement
