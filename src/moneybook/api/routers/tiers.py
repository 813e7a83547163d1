"""Counterparty endpoints, scoped to the authenticated user."""

from fastapi import APIRouter, Depends, Response

from moneybook.api.deps import get_current_user, get_tiers_service
from moneybook.api.schemas import TiersIn, TiersOut
from moneybook.domain.entities import User
from moneybook.domain.tiers import TiersService

router = APIRouter(prefix="/tiers", tags=["counterparties"])


@router.get("", response_model=list[TiersOut])
def list_tiers(
    user: User = Depends(get_current_user),
    service: TiersService = Depends(get_tiers_service),
):
    tiers = service.list_tiers(user.id)
    if not tiers:
        return Response(status_code=204)
    return [TiersOut.from_entity(item) for item in tiers]


@router.get("/{tiers_id}", response_model=TiersOut)
def get_tiers(
    tiers_id: int,
    user: User = Depends(get_current_user),
    service: TiersService = Depends(get_tiers_service),
):
    return TiersOut.from_entity(service.get_tiers(user.id, tiers_id))


@router.post("", response_model=TiersOut, status_code=201)
def create_tiers(
    body: TiersIn,
    user: User = Depends(get_current_user),
    service: TiersService = Depends(get_tiers_service),
):
    return TiersOut.from_entity(service.create_tiers(user.id, body.name))


@router.patch("/{tiers_id}", response_model=TiersOut)
def update_tiers(
    tiers_id: int,
    body: TiersIn,
    user: User = Depends(get_current_user),
    service: TiersService = Depends(get_tiers_service),
):
    return TiersOut.from_entity(service.update_tiers(user.id, tiers_id, body.name))


@router.delete("/{tiers_id}", status_code=204)
def delete_tiers(
    tiers_id: int,
    user: User = Depends(get_current_user),
    service: TiersService = Depends(get_tiers_service),
):
    service.delete_tiers(user.id, tiers_id)
    return Response(status_code=204)
