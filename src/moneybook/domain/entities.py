"""Domain model entities for moneybook.

These are pure data classes representing business concepts, independent of
database schema. Services and the API only ever see these; ORM rows stay
inside the database package.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class MovementType(str, Enum):
    """Movement type tag as stored and exchanged on the wire."""

    DEBIT = "D"
    CREDIT = "C"


@dataclass(frozen=True)
class User:
    """User domain entity.

    Credential material (password and token hashes) never leaves the
    database layer except through the dedicated credential lookups.
    """

    id: int
    login: str
    token_expires_at: Optional[datetime]
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Bank account domain entity, owned by exactly one user."""

    id: int
    user_id: int
    description: str
    bank_name: str
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Top-level category domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class SubCategory:
    """Sub-category domain entity attached to one parent category."""

    id: int
    name: str
    category_id: int
    created_at: datetime


@dataclass(frozen=True)
class Tiers:
    """Counterparty (payee/payer) domain entity, owned by one user."""

    id: int
    user_id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Movement:
    """Movement domain entity: one signed ledger entry against an account."""

    id: int
    date: date
    account_id: int
    tiers_id: int
    category_id: int
    sub_category_id: Optional[int]
    transfer_id: Optional[int]
    amount: Decimal
    type: MovementType
    created_at: datetime


@dataclass(frozen=True)
class Transfer:
    """Transfer domain entity between two accounts of the same user."""

    id: int
    debit_account_id: int
    credit_account_id: int
    amount: Decimal
    date: date
    tiers_id: Optional[int]
    category_id: Optional[int]
    created_at: datetime
