"""FastAPI dependencies: database, settings, authentication and services.

The database and settings live on ``app.state`` (set by ``create_app``);
services are built per request around them.
"""

from typing import Optional

from fastapi import Depends, Request

from moneybook.config import Settings
from moneybook.database.base import Database
from moneybook.domain.account import AccountService
from moneybook.domain.category import CategoryService, SubCategoryService
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.entities import User
from moneybook.domain.errors import AuthenticationError, MalformedAuthorizationError
from moneybook.domain.movement import MovementService
from moneybook.domain.ownership import OwnershipResolver
from moneybook.domain.tiers import TiersService
from moneybook.domain.transfer import TransferService
from moneybook.domain.user import UserService


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def parse_authorization(header: Optional[str], accept_raw_token: bool = False) -> str:
    """Extract the token from an ``Authorization`` header value.

    Args:
        header: Raw header value, or None when absent
        accept_raw_token: Also accept a bare token without the ``Bearer`` scheme

    Returns:
        The token

    Raises:
        AuthenticationError: If the header is absent or empty
        MalformedAuthorizationError: If the header is not ``Bearer <token>``
    """
    if header is None or not header.strip():
        raise AuthenticationError("Missing Authorization header")

    parts = header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    if accept_raw_token and len(parts) == 1 and parts[0].lower() != "bearer":
        return parts[0]
    raise MalformedAuthorizationError("Authorization header must be 'Bearer <token>'")


def get_user_service(
    db: Database = Depends(get_db), settings: Settings = Depends(get_settings)
) -> UserService:
    return UserService(db, token_ttl_minutes=settings.token_ttl_minutes)


def get_current_user(
    request: Request,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> User:
    """Resolve the requesting user from the bearer token."""
    token = parse_authorization(
        request.headers.get("authorization"), accept_raw_token=settings.accept_raw_token
    )
    return users.authenticate(token)


def get_ownership(db: Database = Depends(get_db)) -> OwnershipResolver:
    return OwnershipResolver(db)


def get_duplicates(
    db: Database = Depends(get_db), settings: Settings = Depends(get_settings)
) -> DuplicateChecker:
    return DuplicateChecker(
        db,
        account_scope=settings.account_scope,
        sub_category_scope=settings.sub_category_scope,
    )


def get_account_service(
    db: Database = Depends(get_db),
    ownership: OwnershipResolver = Depends(get_ownership),
    duplicates: DuplicateChecker = Depends(get_duplicates),
) -> AccountService:
    return AccountService(db, ownership=ownership, duplicates=duplicates)


def get_category_service(
    db: Database = Depends(get_db), duplicates: DuplicateChecker = Depends(get_duplicates)
) -> CategoryService:
    return CategoryService(db, duplicates=duplicates)


def get_sub_category_service(
    db: Database = Depends(get_db), duplicates: DuplicateChecker = Depends(get_duplicates)
) -> SubCategoryService:
    return SubCategoryService(db, duplicates=duplicates)


def get_tiers_service(
    db: Database = Depends(get_db),
    ownership: OwnershipResolver = Depends(get_ownership),
    duplicates: DuplicateChecker = Depends(get_duplicates),
) -> TiersService:
    return TiersService(db, ownership=ownership, duplicates=duplicates)


def get_movement_service(
    db: Database = Depends(get_db), ownership: OwnershipResolver = Depends(get_ownership)
) -> MovementService:
    return MovementService(db, ownership=ownership)


def get_transfer_service(
    db: Database = Depends(get_db), ownership: OwnershipResolver = Depends(get_ownership)
) -> TransferService:
    return TransferService(db, ownership=ownership)
