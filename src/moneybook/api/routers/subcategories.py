"""Sub-category endpoints. Sub-categories are shared by all users."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from moneybook.api.deps import get_current_user, get_sub_category_service
from moneybook.api.schemas import SubCategoryIn, SubCategoryOut
from moneybook.domain.category import SubCategoryService

router = APIRouter(
    prefix="/subcategories", tags=["categories"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[SubCategoryOut])
def list_sub_categories(
    category_id: Optional[int] = Query(None, alias="categoryId"),
    service: SubCategoryService = Depends(get_sub_category_service),
):
    sub_categories = service.list_sub_categories(category_id=category_id)
    if not sub_categories:
        return Response(status_code=204)
    return [SubCategoryOut.from_entity(sub_category) for sub_category in sub_categories]


@router.get("/{sub_category_id}", response_model=SubCategoryOut)
def get_sub_category(
    sub_category_id: int, service: SubCategoryService = Depends(get_sub_category_service)
):
    return SubCategoryOut.from_entity(service.get_sub_category(sub_category_id))


@router.post("", response_model=SubCategoryOut, status_code=201)
def create_sub_category(
    body: SubCategoryIn, service: SubCategoryService = Depends(get_sub_category_service)
):
    sub_category = service.create_sub_category(body.name, body.category_id)
    return SubCategoryOut.from_entity(sub_category)


@router.put("/{sub_category_id}", response_model=SubCategoryOut)
def update_sub_category(
    sub_category_id: int,
    body: SubCategoryIn,
    service: SubCategoryService = Depends(get_sub_category_service),
):
    sub_category = service.update_sub_category(
        sub_category_id, name=body.name, category_id=body.category_id
    )
    return SubCategoryOut.from_entity(sub_category)


@router.delete("/{sub_category_id}", status_code=204)
def delete_sub_category(
    sub_category_id: int, service: SubCategoryService = Depends(get_sub_category_service)
):
    service.delete_sub_category(sub_category_id)
    return Response(status_code=204)
