"""Category endpoints. Categories are shared by all users."""

from fastapi import APIRouter, Depends, Response

from moneybook.api.deps import get_category_service, get_current_user
from moneybook.api.schemas import CategoryIn, CategoryOut
from moneybook.domain.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=list[CategoryOut])
def list_categories(service: CategoryService = Depends(get_category_service)):
    categories = service.list_categories()
    if not categories:
        return Response(status_code=204)
    return [CategoryOut.from_entity(category) for category in categories]


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    return CategoryOut.from_entity(service.get_category(category_id))


@router.post("", response_model=CategoryOut, status_code=201)
def create_category(body: CategoryIn, service: CategoryService = Depends(get_category_service)):
    return CategoryOut.from_entity(service.create_category(body.name))


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    body: CategoryIn,
    service: CategoryService = Depends(get_category_service),
):
    return CategoryOut.from_entity(service.update_category(category_id, body.name))


@router.delete("/{category_id}", status_code=204)
def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    service.delete_category(category_id)
    return Response(status_code=204)
