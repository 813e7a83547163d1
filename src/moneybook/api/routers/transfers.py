"""Transfer endpoints between two of the authenticated user's accounts."""

from fastapi import APIRouter, Depends, Response

from moneybook.api.deps import get_current_user, get_transfer_service
from moneybook.api.schemas import TransferIn, TransferOut
from moneybook.domain.entities import User
from moneybook.domain.transfer import TransferService

router = APIRouter(prefix="/transfers", tags=["transfers"])


@router.get("", response_model=list[TransferOut])
def list_transfers(
    user: User = Depends(get_current_user),
    service: TransferService = Depends(get_transfer_service),
):
    transfers = service.list_transfers(user.id)
    if not transfers:
        return Response(status_code=204)
    return [TransferOut.from_entity(transfer) for transfer in transfers]


@router.get("/{transfer_id}", response_model=TransferOut)
def get_transfer(
    transfer_id: int,
    user: User = Depends(get_current_user),
    service: TransferService = Depends(get_transfer_service),
):
    return TransferOut.from_entity(service.get_transfer(user.id, transfer_id))


@router.post("", response_model=TransferOut, status_code=201)
def create_transfer(
    body: TransferIn,
    user: User = Depends(get_current_user),
    service: TransferService = Depends(get_transfer_service),
):
    return TransferOut.from_entity(service.create_transfer(user.id, body.model_dump()))


@router.patch("/{transfer_id}", response_model=TransferOut)
def update_transfer(
    transfer_id: int,
    body: TransferIn,
    user: User = Depends(get_current_user),
    service: TransferService = Depends(get_transfer_service),
):
    transfer = service.update_transfer(user.id, transfer_id, body.model_dump(exclude_unset=True))
    return TransferOut.from_entity(transfer)


@router.delete("/{transfer_id}", status_code=204)
def delete_transfer(
    transfer_id: int,
    user: User = Depends(get_current_user),
    service: TransferService = Depends(get_transfer_service),
):
    service.delete_transfer(user.id, transfer_id)
    return Response(status_code=204)
