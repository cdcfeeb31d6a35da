from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from inventory_api.schemas.category import CategorySummary

class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    price: Decimal = Field(gt=0, max_digits=18, decimal_places=2)
    stock: int = Field(ge=0)
    category_id: int
    image_url: str | None = None
    image_base64: str | None = None

class ProductUpdate(ProductCreate):
    is_active: bool = True

class ProductOut(BaseModel):
    product_id: int
    name: str
    description: str | None
    price: Decimal
    stock: int
    category_id: int
    image_url: str | None
    image_base64: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None
    category: CategorySummary | None = None

    class Config:
        from_attributes = True
