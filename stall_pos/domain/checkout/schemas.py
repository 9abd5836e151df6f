# stall_pos/domain/checkout/schemas.py
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from typing import List, Optional

from stall_pos.core.time_utils import as_utc
from stall_pos.db.models.sales import PaymentMethod


class CheckoutRequest(BaseModel):
    payment_method: PaymentMethod = PaymentMethod.CASH
    client_name: Optional[str] = None
    # Used for the change shown to the customer; never stored
    cash_received: Optional[Decimal] = Field(default=None, ge=0)


class SaleLineOut(BaseModel):
    id: UUID
    product_id: Optional[UUID]
    product_name: Optional[str] = None
    quantity: int
    unit_price: Decimal
    subtotal: Decimal


class SaleOut(BaseModel):
    id: UUID
    user_id: UUID
    client_name: Optional[str]
    payment_method: PaymentMethod
    total_amount: Decimal
    created_at: datetime

    class Config:
        from_attributes = True

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)


class CheckoutResult(BaseModel):
    sale: SaleOut
    lines: List[SaleLineOut]
    change_due: Optional[Decimal] = None


class ReceiptRequest(BaseModel):
    sale_id: UUID
    client_name: Optional[str] = None
    cash_received: Optional[Decimal] = Field(default=None, ge=0)
