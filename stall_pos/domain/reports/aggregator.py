# stall_pos/domain/reports/aggregator.py
"""Business-day summary of the sales made at the counter.

Everything here is a pure function of (now, sales, time zone): the same
inputs always give the same summary.
"""
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Dict, Iterable, List

from stall_pos.core.time_utils import as_utc, day_bounds, in_business_day
from stall_pos.db.models.sales import PaymentMethod
from .schemas import DailySummary, ProductTotal, SaleRecord

UNKNOWN_PRODUCT = "Unknown product"


def sales_of_day(
    now: datetime,
    sales: Iterable[SaleRecord],
    tz: tzinfo,
) -> List[SaleRecord]:
    return [sale for sale in sales if in_business_day(sale.created_at, now, tz)]


def payment_totals(sales: Iterable[SaleRecord]) -> Dict[PaymentMethod, Decimal]:
    totals = {method: Decimal("0") for method in PaymentMethod}
    for sale in sales:
        totals[sale.payment_method] += sale.total_amount
    return totals


def product_totals(sales: Iterable[SaleRecord]) -> List[ProductTotal]:
    # Keyed by name: lines whose product was deleted are pooled under the
    # placeholder instead of being dropped.
    totals: Dict[str, ProductTotal] = {}
    for sale in sales:
        for line in sale.lines:
            name = line.product_name or UNKNOWN_PRODUCT
            entry = totals.get(name)
            if entry is None:
                totals[name] = ProductTotal(name=name, quantity=line.quantity, revenue=line.subtotal)
            else:
                entry.quantity += line.quantity
                entry.revenue += line.subtotal
    return list(totals.values())


def summarize_day(
    now: datetime,
    sales: Iterable[SaleRecord],
    tz: tzinfo,
) -> DailySummary:
    today = sales_of_day(now, sales, tz)
    start, _ = day_bounds(now, tz)

    return DailySummary(
        day=start.date(),
        sales_count=len(today),
        total_revenue=sum((sale.total_amount for sale in today), Decimal("0")),
        payment_totals=payment_totals(today),
        products=product_totals(today),
    )


def latest_first(sales: Iterable[SaleRecord]) -> List[SaleRecord]:
    return sorted(sales, key=lambda s: as_utc(s.created_at), reverse=True)
