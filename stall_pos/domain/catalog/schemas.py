# stall_pos/domain/catalog/schemas.py
from decimal import Decimal
from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(ge=0, decimal_places=2)
    stock_quantity: int = Field(ge=0)
    category: str = Field(min_length=1)
    barcode: Optional[str] = None
    image_base64: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = Field(default=None, min_length=1)
    barcode: Optional[str] = None
    image_base64: Optional[str] = None


class ProductOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    price: Decimal
    stock_quantity: int
    category: str
    barcode: Optional[str] = None
    image_base64: Optional[str] = None

    class Config:
        from_attributes = True


class DashboardStats(BaseModel):
    total_products: int
    low_stock_products: int
    today_sales: int
    today_revenue: Decimal
