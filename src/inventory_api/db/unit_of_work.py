from __future__ import annotations
from datetime import datetime, timezone
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from inventory_api.db.base import TimestampMixin
from inventory_api.repositories.user_repo import UserRepo
from inventory_api.repositories.category_repo import CategoryRepo
from inventory_api.repositories.product_repo import ProductRepo


class UnitOfWork:
    """
    One request's worth of data access.

    Wraps a single AsyncSession, exposes one repository per entity and owns
    the only commit point. Services receive it explicitly; nothing reaches for
    a global session.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepo(session)
        self.categories = CategoryRepo(session)
        self.products = ProductRepo(session)

    def add(self, entity: Any) -> None:
        self.session.add(entity)

    async def delete(self, entity: Any) -> None:
        await self.session.delete(entity)

    async def commit(self) -> None:
        self._stamp_timestamps()
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    def _stamp_timestamps(self) -> None:
        now = datetime.now(tz=timezone.utc)
        for entity in self.session.new:
            if isinstance(entity, TimestampMixin):
                entity.created_at = now
        for entity in self.session.dirty:
            if isinstance(entity, TimestampMixin):
                entity.updated_at = now
