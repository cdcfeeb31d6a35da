from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from inventory_api.core.errors import ValidationError
from inventory_api.db.unit_of_work import UnitOfWork
from inventory_api.routers.deps import get_uow, get_actor_claims
from inventory_api.schemas.product import ProductCreate, ProductUpdate, ProductOut
from inventory_api.services.product_service import ProductService, DEFAULT_PAGE, DEFAULT_LIMIT

router = APIRouter(prefix="/products", tags=["products"], dependencies=[Depends(get_actor_claims)])

@router.get("", response_model=list[ProductOut])
async def list_products(
    request: Request,
    category_id: int | None = Query(default=None),
    min_price: Decimal | None = Query(default=None),
    max_price: Decimal | None = Query(default=None),
    page: int = Query(default=DEFAULT_PAGE, description="1-based; values below 1 are treated as 1"),
    limit: int = Query(default=DEFAULT_LIMIT, description="clamped to 1..100"),
    uow: UnitOfWork = Depends(get_uow),
):
    service = ProductService(uow)
    has_filters = category_id is not None or min_price is not None or max_price is not None
    paginated = "page" in request.query_params or "limit" in request.query_params
    # no filters and no explicit paging: the whole active catalogue
    if not has_filters and not paginated:
        return await service.list_all()
    return await service.list_filtered(
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        page=page,
        limit=limit,
    )

@router.get("/search", response_model=list[ProductOut])
async def search_products(q: str | None = Query(default=None), uow: UnitOfWork = Depends(get_uow)):
    if not q or not q.strip():
        raise ValidationError("Search term is required")
    return await ProductService(uow).search(q)

@router.get("/{product_id}", response_model=ProductOut)
async def get_product(product_id: int, uow: UnitOfWork = Depends(get_uow)):
    product = await ProductService(uow).get_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product

@router.post("", response_model=ProductOut, status_code=201)
async def create_product(payload: ProductCreate, uow: UnitOfWork = Depends(get_uow)):
    return await ProductService(uow).create(payload)

@router.put("/{product_id}", response_model=ProductOut)
async def update_product(product_id: int, payload: ProductUpdate, uow: UnitOfWork = Depends(get_uow)):
    return await ProductService(uow).update(product_id, payload)

@router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: int, uow: UnitOfWork = Depends(get_uow)):
    if not await ProductService(uow).delete(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
