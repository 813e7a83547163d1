"""Request and response models for the HTTP API.

Field names are snake_case in Python and camelCase on the wire. Request
fields the domain validates itself (amounts, dates, movement types) are
accepted loosely here so the domain reports the precise error.
"""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from moneybook.domain.entities import (
    Account,
    Category,
    Movement,
    SubCategory,
    Tiers,
    Transfer,
    User,
)


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Structured error payload."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Standard error response envelope."""

    error: ErrorDetail


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class Credentials(CamelModel):
    login: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    id: int
    login: str
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserOut":
        return cls(id=user.id, login=user.login, created_at=user.created_at)


class TokenOut(CamelModel):
    token: str
    token_type: str = "bearer"
    expires_at: Optional[datetime] = None
    user: UserOut


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


class AccountCreate(CamelModel):
    description: Optional[str] = None
    bank_name: Optional[str] = None


class AccountUpdate(CamelModel):
    description: Optional[str] = None
    bank_name: Optional[str] = None


class AccountOut(CamelModel):
    id: int
    user_id: int
    description: str
    bank_name: str
    created_at: datetime

    @classmethod
    def from_entity(cls, account: Account) -> "AccountOut":
        return cls(
            id=account.id,
            user_id=account.user_id,
            description=account.description,
            bank_name=account.bank_name,
            created_at=account.created_at,
        )


# ---------------------------------------------------------------------------
# Categories and sub-categories
# ---------------------------------------------------------------------------


class CategoryIn(CamelModel):
    name: Optional[str] = None


class CategoryOut(CamelModel):
    id: int
    name: str
    created_at: datetime

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryOut":
        return cls(id=category.id, name=category.name, created_at=category.created_at)


class SubCategoryIn(CamelModel):
    name: Optional[str] = None
    category_id: Optional[int] = None


class SubCategoryOut(CamelModel):
    id: int
    name: str
    category_id: int
    created_at: datetime

    @classmethod
    def from_entity(cls, sub_category: SubCategory) -> "SubCategoryOut":
        return cls(
            id=sub_category.id,
            name=sub_category.name,
            category_id=sub_category.category_id,
            created_at=sub_category.created_at,
        )


# ---------------------------------------------------------------------------
# Counterparties
# ---------------------------------------------------------------------------


class TiersIn(CamelModel):
    name: Optional[str] = None


class TiersOut(CamelModel):
    id: int
    user_id: int
    name: str
    created_at: datetime

    @classmethod
    def from_entity(cls, tiers: Tiers) -> "TiersOut":
        return cls(id=tiers.id, user_id=tiers.user_id, name=tiers.name, created_at=tiers.created_at)


# ---------------------------------------------------------------------------
# Movements
# ---------------------------------------------------------------------------


class MovementIn(CamelModel):
    date: Any = None
    account_id: Optional[int] = None
    tiers_id: Optional[int] = Field(None, alias="counterpartyId")
    category_id: Optional[int] = None
    sub_category_id: Optional[int] = None
    transfer_id: Optional[int] = None
    amount: Any = None
    type: Any = None


class MovementOut(CamelModel):
    id: int
    date: date
    account_id: int
    tiers_id: int = Field(alias="counterpartyId")
    category_id: int
    sub_category_id: Optional[int] = None
    transfer_id: Optional[int] = None
    amount: float
    type: str
    created_at: datetime
    advisory: Optional[str] = None

    @classmethod
    def from_entity(cls, movement: Movement, advisory: Optional[str] = None) -> "MovementOut":
        return cls(
            id=movement.id,
            date=movement.date,
            account_id=movement.account_id,
            tiers_id=movement.tiers_id,
            category_id=movement.category_id,
            sub_category_id=movement.sub_category_id,
            transfer_id=movement.transfer_id,
            amount=float(movement.amount),
            type=movement.type.value,
            created_at=movement.created_at,
            advisory=advisory,
        )


# ---------------------------------------------------------------------------
# Transfers
# ---------------------------------------------------------------------------


class TransferIn(CamelModel):
    debit_account_id: Optional[int] = None
    credit_account_id: Optional[int] = None
    amount: Any = None
    date: Any = None
    tiers_id: Optional[int] = Field(None, alias="counterpartyId")
    category_id: Optional[int] = None


class TransferOut(CamelModel):
    id: int
    debit_account_id: int
    credit_account_id: int
    amount: float
    date: date
    tiers_id: Optional[int] = Field(None, alias="counterpartyId")
    category_id: Optional[int] = None
    created_at: datetime

    @classmethod
    def from_entity(cls, transfer: Transfer) -> "TransferOut":
        return cls(
            id=transfer.id,
            debit_account_id=transfer.debit_account_id,
            credit_account_id=transfer.credit_account_id,
            amount=float(transfer.amount),
            date=transfer.date,
            tiers_id=transfer.tiers_id,
            category_id=transfer.category_id,
            created_at=transfer.created_at,
        )


# ---------------------------------------------------------------------------
# System
# ---------------------------------------------------------------------------


class HealthOut(BaseModel):
    status: str
    version: str
