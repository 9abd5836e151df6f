
from datetime import datetime
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import select

from stall_pos.core.time_utils import as_utc
from stall_pos.db.models.sale_items import SaleItem
from stall_pos.db.models.sales import Sale


async def get_sale_with_items(db: AsyncSession, sale_id) -> Sale:
    result = await db.execute(
        select(Sale)
        .where(Sale.id == sale_id)
        .options(selectinload(Sale.items).selectinload(SaleItem.product))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_sales_with_items(
    db: AsyncSession,
    start: datetime,
    end: datetime,
) -> List[Sale]:
    """Sales created in [start, end], each with its lines and their products."""
    result = await db.execute(
        select(Sale)
        .where(Sale.created_at >= as_utc(start), Sale.created_at <= as_utc(end))
        .options(selectinload(Sale.items).selectinload(SaleItem.product))
        .execution_options(populate_existing=True)
        .order_by(Sale.created_at)
    )
    return list(result.scalars().all())
