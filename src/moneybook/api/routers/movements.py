"""Movement endpoints, scoped to the authenticated user's accounts.

Endpoints
---------
GET    /movements         List movements. Optional ``accountId``, ``categoryId``,
                          ``start``/``end`` (dates, also "today", "yesterday")
                          or ``period`` (this-month, last-year, ...).
GET    /movements/{id}    Single movement.
POST   /movements         Post a movement; the response carries ``advisory``
                          when the amount sign was corrected.
PATCH  /movements/{id}    Partial update, re-validated as a whole.
DELETE /movements/{id}    Delete a movement.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from moneybook.api.deps import get_current_user, get_movement_service
from moneybook.api.schemas import MovementIn, MovementOut
from moneybook.domain.entities import User
from moneybook.domain.errors import ValidationError
from moneybook.domain.movement import MovementService
from moneybook.utils.date_parser import get_date_range, parse_date

router = APIRouter(prefix="/movements", tags=["movements"])


@router.get("", response_model=list[MovementOut])
def list_movements(
    account_id: Optional[int] = Query(None, alias="accountId"),
    category_id: Optional[int] = Query(None, alias="categoryId"),
    start: Optional[str] = Query(None),
    end: Optional[str] = Query(None),
    period: Optional[str] = Query(None),
    user: User = Depends(get_current_user),
    service: MovementService = Depends(get_movement_service),
):
    if period and (start or end):
        raise ValidationError("Use either 'period' or 'start'/'end', not both")

    start_date = end_date = None
    if period:
        start_date, end_date = get_date_range(period)
    else:
        start_date = parse_date(start) if start else None
        end_date = parse_date(end) if end else None

    movements = service.list_movements(
        user.id,
        account_id=account_id,
        category_id=category_id,
        start_date=start_date,
        end_date=end_date,
    )
    if not movements:
        return Response(status_code=204)
    return [MovementOut.from_entity(movement) for movement in movements]


@router.get("/{movement_id}", response_model=MovementOut)
def get_movement(
    movement_id: int,
    user: User = Depends(get_current_user),
    service: MovementService = Depends(get_movement_service),
):
    return MovementOut.from_entity(service.get_movement(user.id, movement_id))


@router.post("", response_model=MovementOut, status_code=201)
def create_movement(
    body: MovementIn,
    user: User = Depends(get_current_user),
    service: MovementService = Depends(get_movement_service),
):
    result = service.create_movement(user.id, body.model_dump())
    return MovementOut.from_entity(result.movement, advisory=result.advisory)


@router.patch("/{movement_id}", response_model=MovementOut)
def update_movement(
    movement_id: int,
    body: MovementIn,
    user: User = Depends(get_current_user),
    service: MovementService = Depends(get_movement_service),
):
    result = service.update_movement(user.id, movement_id, body.model_dump(exclude_unset=True))
    return MovementOut.from_entity(result.movement, advisory=result.advisory)


@router.delete("/{movement_id}", status_code=204)
def delete_movement(
    movement_id: int,
    user: User = Depends(get_current_user),
    service: MovementService = Depends(get_movement_service),
):
    service.delete_movement(user.id, movement_id)
    return Response(status_code=204)
