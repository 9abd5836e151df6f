# stall_pos/domain/reports/schemas.py
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel
from uuid import UUID
from typing import Dict, List, Optional, Tuple

from stall_pos.db.models.sales import PaymentMethod


class SaleLineRecord(BaseModel):
    product_name: Optional[str] = None
    quantity: int
    subtotal: Decimal

    class Config:
        frozen = True


class SaleRecord(BaseModel):
    """A stored sale joined with its lines, as the aggregator consumes it."""

    id: UUID
    total_amount: Decimal
    payment_method: PaymentMethod
    created_at: datetime
    lines: Tuple[SaleLineRecord, ...] = ()

    class Config:
        frozen = True


class ProductTotal(BaseModel):
    name: str
    quantity: int
    revenue: Decimal


class DailySummary(BaseModel):
    day: date
    sales_count: int
    total_revenue: Decimal
    payment_totals: Dict[PaymentMethod, Decimal]
    products: List[ProductTotal]

    def top_products(self, n: Optional[int] = None) -> List[ProductTotal]:
        ranked = sorted(self.products, key=lambda p: p.quantity, reverse=True)
        return ranked if n is None else ranked[:n]


class TodaySale(BaseModel):
    id: UUID
    client_name: Optional[str]
    payment_method: PaymentMethod
    total_amount: Decimal
    created_at: datetime
