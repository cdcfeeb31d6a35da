from __future__ import annotations
from decimal import Decimal
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload
from inventory_api.models.product import Product

class ProductRepo:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _with_category(self):
        # populate_existing: category_id may have changed since the row was first loaded
        return (
            select(Product)
            .options(joinedload(Product.category))
            .execution_options(populate_existing=True)
        )

    def _active_with_category(self):
        return self._with_category().where(Product.is_active.is_(True))

    async def get_by_id(self, product_id: int) -> Product | None:
        res = await self.session.execute(select(Product).where(Product.product_id == product_id))
        return res.scalars().first()

    async def get_with_category(self, product_id: int) -> Product | None:
        res = await self.session.execute(self._with_category().where(Product.product_id == product_id))
        return res.scalars().first()

    async def list_active(self) -> list[Product]:
        res = await self.session.execute(self._active_with_category().order_by(Product.product_id))
        return list(res.scalars().all())

    async def list_by_category(self, category_id: int) -> list[Product]:
        stmt = (
            self._active_with_category()
            .where(Product.category_id == category_id)
            .order_by(Product.product_id)
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def list_filtered(
        self,
        *,
        category_id: int | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Product]:
        stmt = self._active_with_category()
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        if min_price is not None:
            stmt = stmt.where(Product.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(Product.price <= max_price)
        stmt = stmt.order_by(Product.product_id).offset(offset).limit(limit)
        res = await self.session.execute(stmt)
        return list(res.scalars().all())

    async def search(self, term: str) -> list[Product]:
        # plain LIKE substring match; case sensitivity is whatever the store's LIKE does
        stmt = (
            self._active_with_category()
            .where(
                or_(
                    Product.name.contains(term, autoescape=True),
                    Product.description.contains(term, autoescape=True),
                )
            )
            .order_by(Product.product_id)
        )
        res = await self.session.execute(stmt)
        return list(res.scalars().all())
