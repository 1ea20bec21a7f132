from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.product import ProductCategory


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    usage: str | None = None
    measurements: str | None = Field(default=None, max_length=255)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    category: ProductCategory
    unit: str | None = Field(default=None, max_length=30)
    image_url: str | None = Field(default=None, max_length=500)
    tags: list[str] = Field(default_factory=list)

    model_config = {"use_enum_values": True}


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    usage: str | None = None
    measurements: str | None = Field(default=None, max_length=255)
    price: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    category: ProductCategory | None = None
    unit: str | None = Field(default=None, max_length=30)
    image_url: str | None = Field(default=None, max_length=500)
    tags: list[str] | None = None

    model_config = {"use_enum_values": True}


class ProductBulkCreate(BaseModel):
    items: list[ProductCreate] = Field(min_length=1, max_length=500)


class ProductResponse(BaseModel):
    id: UUID
    name: str
    description: str | None
    usage: str | None
    measurements: str | None
    price: Decimal
    category: str
    unit: str | None
    image_url: str | None
    tags: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProductCategoryResponse(BaseModel):
    value: str
    label: str
