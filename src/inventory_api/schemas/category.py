from datetime import datetime
from pydantic import BaseModel, Field

class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=500)

class CategoryUpdate(CategoryCreate):
    is_active: bool = True

class CategorySummary(BaseModel):
    category_id: int
    name: str
    description: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None

    class Config:
        from_attributes = True

class CategoryOut(CategorySummary):
    product_count: int = 0
