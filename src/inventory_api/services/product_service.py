import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError

from inventory_api.core.errors import NotFoundError
from inventory_api.db.unit_of_work import UnitOfWork
from inventory_api.models.product import Product
from inventory_api.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def page_window(page: int, limit: int) -> tuple[int, int]:
    """Clamp page/limit and turn them into (offset, limit)."""
    page = max(page, 1)
    limit = min(max(limit, 1), MAX_LIMIT)
    return (page - 1) * limit, limit


class ProductService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_all(self) -> list[Product]:
        return await self.uow.products.list_active()

    async def list_filtered(
        self,
        *,
        category_id: int | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_LIMIT,
    ) -> list[Product]:
        offset, limit = page_window(page, limit)
        return await self.uow.products.list_filtered(
            category_id=category_id,
            min_price=min_price,
            max_price=max_price,
            limit=limit,
            offset=offset,
        )

    async def search(self, term: str) -> list[Product]:
        # blank terms are rejected by the router, not here
        return await self.uow.products.search(term)

    async def get_by_id(self, product_id: int) -> Product | None:
        return await self.uow.products.get_with_category(product_id)

    async def create(self, payload: ProductCreate) -> Product:
        if not await self.uow.categories.id_exists(payload.category_id):
            raise NotFoundError("Category")

        product = Product(
            name=payload.name,
            description=payload.description,
            price=payload.price,
            stock=payload.stock,
            category_id=payload.category_id,
            image_url=payload.image_url,
            image_base64=payload.image_base64,
            is_active=True,
        )
        self.uow.add(product)
        await self._commit_category_link()

        logger.info("Product created: %s (id=%s)", product.name, product.product_id)
        # re-read so the response reflects the committed row and its category
        return await self.uow.products.get_with_category(product.product_id)

    async def update(self, product_id: int, payload: ProductUpdate) -> Product:
        product = await self.uow.products.get_by_id(product_id)
        if not product:
            raise NotFoundError("Product")
        if not await self.uow.categories.id_exists(payload.category_id):
            raise NotFoundError("Category")

        product.name = payload.name
        product.description = payload.description
        product.price = payload.price
        product.stock = payload.stock
        product.category_id = payload.category_id
        product.image_url = payload.image_url
        product.image_base64 = payload.image_base64
        product.is_active = payload.is_active
        await self._commit_category_link()

        logger.info("Product updated: id=%s", product_id)
        return await self.uow.products.get_with_category(product_id)

    async def delete(self, product_id: int) -> bool:
        product = await self.uow.products.get_by_id(product_id)
        if not product:
            return False

        await self.uow.delete(product)
        await self.uow.commit()
        logger.info("Product deleted: id=%s", product_id)
        return True

    async def _commit_category_link(self) -> None:
        try:
            await self.uow.commit()
        except IntegrityError as exc:
            # the category was deleted between the existence check and the commit
            raise NotFoundError("Category") from exc
