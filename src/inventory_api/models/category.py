from __future__ import annotations
from typing import TYPE_CHECKING
from sqlalchemy import String, Boolean, text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from inventory_api.db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from inventory_api.models.product import Product

class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    category_id: Mapped[int] = mapped_column(primary_key=True, index=True)
    # unique index is the backstop for the racy name pre-check in CategoryService
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default=text("true"))

    # never traversed implicitly; load with selectinload() when needed
    products: Mapped[list[Product]] = relationship(back_populates="category", lazy="raise", passive_deletes="all")
