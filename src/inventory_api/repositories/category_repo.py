from sqlalchemy import select, exists, func
from sqlalchemy.ext.asyncio import AsyncSession
from inventory_api.models.category import Category
from inventory_api.models.product import Product

class CategoryRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _with_product_count(self):
        # counts every linked product, active or not
        return (
            select(Category, func.count(Product.product_id).label("product_count"))
            .outerjoin(Product, Product.category_id == Category.category_id)
            .group_by(Category.category_id)
        )

    async def get_by_id(self, category_id: int) -> Category | None:
        res = await self.session.execute(select(Category).where(Category.category_id == category_id))
        return res.scalars().first()

    async def get_with_product_count(self, category_id: int) -> tuple[Category, int] | None:
        res = await self.session.execute(
            self._with_product_count().where(Category.category_id == category_id)
        )
        row = res.first()
        if row is None:
            return None
        return row[0], row[1]

    async def list_with_product_count(self) -> list[tuple[Category, int]]:
        res = await self.session.execute(self._with_product_count().order_by(Category.category_id))
        return [(category, count) for category, count in res.all()]

    async def get_by_name(self, name: str) -> Category | None:
        # exact, case-sensitive comparison
        res = await self.session.execute(select(Category).where(Category.name == name))
        return res.scalars().first()

    async def name_exists(self, name: str) -> bool:
        return bool(await self.session.scalar(select(exists().where(Category.name == name))))

    async def has_products(self, category_id: int) -> bool:
        return bool(await self.session.scalar(select(exists().where(Product.category_id == category_id))))

    async def id_exists(self, category_id: int) -> bool:
        return bool(await self.session.scalar(select(exists().where(Category.category_id == category_id))))
