"""Account endpoints, scoped to the authenticated user."""

from fastapi import APIRouter, Depends, Response

from moneybook.api.deps import get_account_service, get_current_user
from moneybook.api.schemas import AccountCreate, AccountOut, AccountUpdate
from moneybook.domain.account import AccountService
from moneybook.domain.entities import User

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=list[AccountOut])
def list_accounts(
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    accounts = service.list_accounts(user.id)
    if not accounts:
        return Response(status_code=204)
    return [AccountOut.from_entity(account) for account in accounts]


@router.get("/{account_id}", response_model=AccountOut)
def get_account(
    account_id: int,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    return AccountOut.from_entity(service.get_account(user.id, account_id))


@router.post("", response_model=AccountOut, status_code=201)
def create_account(
    body: AccountCreate,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    account = service.create_account(user.id, body.description, body.bank_name)
    return AccountOut.from_entity(account)


@router.patch("/{account_id}", response_model=AccountOut)
def update_account(
    account_id: int,
    body: AccountUpdate,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    account = service.update_account(user.id, account_id, body.model_dump(exclude_unset=True))
    return AccountOut.from_entity(account)


@router.delete("/{account_id}", status_code=204)
def delete_account(
    account_id: int,
    user: User = Depends(get_current_user),
    service: AccountService = Depends(get_account_service),
):
    service.delete_account(user.id, account_id)
    return Response(status_code=204)
