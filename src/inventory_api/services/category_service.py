import logging

from sqlalchemy.exc import IntegrityError

from inventory_api.core.errors import ConflictError, NotFoundError
from inventory_api.db.unit_of_work import UnitOfWork
from inventory_api.models.category import Category
from inventory_api.models.product import Product
from inventory_api.schemas.category import CategoryCreate, CategoryUpdate, CategoryOut

logger = logging.getLogger(__name__)

NAME_TAKEN = "Category name already exists"


def _to_out(category: Category, product_count: int) -> CategoryOut:
    return CategoryOut(
        category_id=category.category_id,
        name=category.name,
        description=category.description,
        is_active=category.is_active,
        product_count=product_count,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


class CategoryService:
    """
    Category CRUD.

    Name uniqueness is checked in code with exact string equality before every
    write; the unique index on ``categories.name`` catches whatever slips past
    the check under concurrency. A category that still has products, active or
    not, cannot be deleted.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def list_all(self) -> list[CategoryOut]:
        rows = await self.uow.categories.list_with_product_count()
        return [_to_out(category, count) for category, count in rows]

    async def get_by_id(self, category_id: int) -> CategoryOut | None:
        row = await self.uow.categories.get_with_product_count(category_id)
        if row is None:
            return None
        return _to_out(*row)

    async def create(self, payload: CategoryCreate) -> CategoryOut:
        if await self.uow.categories.name_exists(payload.name):
            raise ConflictError(NAME_TAKEN)

        category = Category(name=payload.name, description=payload.description, is_active=True)
        self.uow.add(category)
        await self._commit_name_change()

        logger.info("Category created: %s (id=%s)", category.name, category.category_id)
        return _to_out(category, 0)

    async def update(self, category_id: int, payload: CategoryUpdate) -> CategoryOut:
        category = await self.uow.categories.get_by_id(category_id)
        if not category:
            raise NotFoundError("Category")

        clash = await self.uow.categories.get_by_name(payload.name)
        if clash and clash.category_id != category_id:
            raise ConflictError(NAME_TAKEN)

        category.name = payload.name
        category.description = payload.description
        category.is_active = payload.is_active
        await self._commit_name_change()

        logger.info("Category updated: id=%s", category_id)
        row = await self.uow.categories.get_with_product_count(category_id)
        return _to_out(*row)

    async def delete(self, category_id: int) -> bool:
        category = await self.uow.categories.get_by_id(category_id)
        if not category:
            return False

        if await self.uow.categories.has_products(category_id):
            logger.warning("Refusing to delete category %s: products still linked", category_id)
            raise ConflictError("Cannot delete category with linked products")

        await self.uow.delete(category)
        try:
            await self.uow.commit()
        except IntegrityError as exc:
            # a product was linked between the check and the delete
            raise ConflictError("Cannot delete category with linked products") from exc

        logger.info("Category deleted: id=%s", category_id)
        return True

    async def list_products(self, category_id: int) -> list[Product]:
        if not await self.uow.categories.id_exists(category_id):
            raise NotFoundError("Category")
        return await self.uow.products.list_by_category(category_id)

    async def _commit_name_change(self) -> None:
        try:
            await self.uow.commit()
        except IntegrityError as exc:
            raise ConflictError(NAME_TAKEN) from exc
