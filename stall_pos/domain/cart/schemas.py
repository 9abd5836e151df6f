# stall_pos/domain/cart/schemas.py
from decimal import Decimal
from pydantic import BaseModel, Field
from uuid import UUID
from typing import List

from stall_pos.domain.catalog.schemas import ProductOut


class CartItemAdd(BaseModel):
    product_id: UUID
    quantity: int = Field(default=1, ge=1)


class CartQuantity(BaseModel):
    quantity: int = Field(ge=0)


class CartLineOut(BaseModel):
    product: ProductOut
    quantity: int
    subtotal: Decimal


class CartOut(BaseModel):
    lines: List[CartLineOut]
    total: Decimal
