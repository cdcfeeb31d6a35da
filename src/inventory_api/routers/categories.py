from fastapi import APIRouter, Depends, HTTPException

from inventory_api.db.unit_of_work import UnitOfWork
from inventory_api.routers.deps import get_uow, get_actor_claims
from inventory_api.schemas.category import CategoryCreate, CategoryUpdate, CategoryOut
from inventory_api.schemas.product import ProductOut
from inventory_api.services.category_service import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"], dependencies=[Depends(get_actor_claims)])

@router.get("", response_model=list[CategoryOut])
async def list_categories(uow: UnitOfWork = Depends(get_uow)):
    return await CategoryService(uow).list_all()

@router.get("/{category_id}", response_model=CategoryOut)
async def get_category(category_id: int, uow: UnitOfWork = Depends(get_uow)):
    category = await CategoryService(uow).get_by_id(category_id)
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category

@router.get("/{category_id}/products", response_model=list[ProductOut])
async def list_category_products(category_id: int, uow: UnitOfWork = Depends(get_uow)):
    return await CategoryService(uow).list_products(category_id)

@router.post("", response_model=CategoryOut, status_code=201)
async def create_category(payload: CategoryCreate, uow: UnitOfWork = Depends(get_uow)):
    return await CategoryService(uow).create(payload)

@router.put("/{category_id}", response_model=CategoryOut)
async def update_category(category_id: int, payload: CategoryUpdate, uow: UnitOfWork = Depends(get_uow)):
    return await CategoryService(uow).update(category_id, payload)

@router.delete("/{category_id}", status_code=204)
async def delete_category(category_id: int, uow: UnitOfWork = Depends(get_uow)):
    if not await CategoryService(uow).delete(category_id):
        raise HTTPException(status_code=404, detail="Category not found")
