# stall_pos/domain/reports/service.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.core.config import settings
from stall_pos.core.time_utils import as_utc, day_bounds, utcnow
from stall_pos.db.models.sales import Sale
from stall_pos.db.repositories.sales import list_sales_with_items
from .aggregator import latest_first, sales_of_day, summarize_day
from .schemas import DailySummary, SaleLineRecord, SaleRecord, TodaySale


def to_record(sale: Sale) -> SaleRecord:
    return SaleRecord(
        id=sale.id,
        total_amount=sale.total_amount,
        payment_method=sale.payment_method,
        created_at=as_utc(sale.created_at),
        lines=tuple(
            SaleLineRecord(
                product_name=item.product.name if item.product is not None else None,
                quantity=item.quantity,
                subtotal=item.subtotal,
            )
            for item in sale.items
        ),
    )


async def fetch_day_records(
    db: AsyncSession,
    now: datetime,
) -> List[SaleRecord]:
    start, end = day_bounds(now, settings.business_tz)
    sales = await list_sales_with_items(db, start, end)
    return [to_record(sale) for sale in sales]


async def build_daily_report(
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> DailySummary:
    now = now or utcnow()
    records = await fetch_day_records(db, now)
    return summarize_day(now, records, settings.business_tz)


async def list_today_sales(
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> List[TodaySale]:
    """The day's sales, most recent first, for the attendant's panel."""
    now = now or utcnow()
    start, end = day_bounds(now, settings.business_tz)
    sales = {sale.id: sale for sale in await list_sales_with_items(db, start, end)}

    records = [to_record(sale) for sale in sales.values()]
    today = latest_first(sales_of_day(now, records, settings.business_tz))

    return [
        TodaySale(
            id=record.id,
            client_name=sales[record.id].client_name,
            payment_method=record.payment_method,
            total_amount=record.total_amount,
            created_at=record.created_at,
        )
        for record in today
    ]
