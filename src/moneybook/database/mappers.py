"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from moneybook.domain import entities as domain
from moneybook.database.models import (
    User as ORMUser,
    Account as ORMAccount,
    Category as ORMCategory,
    SubCategory as ORMSubCategory,
    Tiers as ORMTiers,
    Movement as ORMMovement,
    Transfer as ORMTransfer,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        login=orm_user.login,
        token_expires_at=orm_user.token_expires_at,
        created_at=orm_user.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        user_id=orm_account.user_id,
        description=orm_account.description,
        bank_name=orm_account.bank_name,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        created_at=orm_category.created_at,
    )


def sub_category_to_domain(orm_sub_category: ORMSubCategory) -> domain.SubCategory:
    """Convert SQLAlchemy SubCategory model to domain SubCategory entity."""
    return domain.SubCategory(
        id=orm_sub_category.id,
        name=orm_sub_category.name,
        category_id=orm_sub_category.category_id,
        created_at=orm_sub_category.created_at,
    )


def tiers_to_domain(orm_tiers: ORMTiers) -> domain.Tiers:
    """Convert SQLAlchemy Tiers model to domain Tiers entity."""
    return domain.Tiers(
        id=orm_tiers.id,
        user_id=orm_tiers.user_id,
        name=orm_tiers.name,
        created_at=orm_tiers.created_at,
    )


def movement_to_domain(orm_movement: ORMMovement) -> domain.Movement:
    """Convert SQLAlchemy Movement model to domain Movement entity."""
    return domain.Movement(
        id=orm_movement.id,
        date=orm_movement.date,
        account_id=orm_movement.account_id,
        tiers_id=orm_movement.tiers_id,
        category_id=orm_movement.category_id,
        sub_category_id=orm_movement.sub_category_id,
        transfer_id=orm_movement.transfer_id,
        amount=orm_movement.amount,
        type=domain.MovementType(orm_movement.type),
        created_at=orm_movement.created_at,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        debit_account_id=orm_transfer.debit_account_id,
        credit_account_id=orm_transfer.credit_account_id,
        amount=orm_transfer.amount,
        date=orm_transfer.date,
        tiers_id=orm_transfer.tiers_id,
        category_id=orm_transfer.category_id,
        created_at=orm_transfer.created_at,
    )
