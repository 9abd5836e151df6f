
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from stall_pos.db.models.products import Product


async def get_product_by_id(
    db: AsyncSession,
    product_id: UUID
) -> Optional[Product]:
    result = await db.execute(
        select(Product)
        .where(Product.id == product_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def list_products(
    db: AsyncSession,
    in_stock_only: bool = False,
) -> List[Product]:
    query = select(Product).order_by(Product.name)
    if in_stock_only:
        query = query.where(Product.stock_quantity > 0)
    result = await db.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())


async def count_products(db: AsyncSession) -> int:
    result = await db.execute(select(func.count(Product.id)))
    return result.scalar_one()


async def count_low_stock(db: AsyncSession, threshold: int) -> int:
    result = await db.execute(
        select(func.count(Product.id)).where(Product.stock_quantity < threshold)
    )
    return result.scalar_one()


async def decrement_stock(
    db: AsyncSession,
    product_id: UUID,
    quantity: int,
) -> bool:
    """Take `quantity` off the product's stock unless that would go negative.

    Returns False when the product is gone or holds less than `quantity`.
    """
    result = await db.execute(
        update(Product)
        .where(Product.id == product_id, Product.stock_quantity >= quantity)
        .values(stock_quantity=Product.stock_quantity - quantity)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1
