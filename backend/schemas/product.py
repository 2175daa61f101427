# backend/schemas/product.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CategoryCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None


class CategoryOut(ORMBase):
    id: int
    name: str
    description: Optional[str] = None


# Schema for creating a new product
class ProductCreate(BaseModel):
    sku: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[int] = None


# Schema for partial product updates
class ProductEditRequest(BaseModel):
    """Schema for PATCH requests - all fields optional."""
    name: Optional[str] = Field(None, description="Product name")
    description: Optional[str] = None
    is_active: Optional[bool] = None
    category_id: Optional[int] = Field(None, description="Existing category id")


class ProductResponse(ORMBase):
    id: int
    name: str
    sku: str
    description: Optional[str] = None
    is_active: bool
    category_id: Optional[int] = None
    category: Optional[CategoryOut] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProductListPage(BaseModel):
    items: List[ProductResponse]
    total: int
    page: int
    page_size: int
