# stall_pos/domain/catalog/service.py
import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.core.config import settings
from stall_pos.db.models.products import Product
from stall_pos.db.repositories import products as products_repo
from stall_pos.domain.errors import NotFoundError, ValidationFailed
from stall_pos.domain.reports.service import build_daily_report
from .schemas import DashboardStats, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = {"name", "price", "stock_quantity", "category"}


async def list_products(db: AsyncSession) -> List[Product]:
    return await products_repo.list_products(db)


async def get_product(db: AsyncSession, product_id: UUID) -> Product:
    product = await products_repo.get_product_by_id(db, product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
    product = Product(**data.model_dump())

    db.add(product)
    await db.commit()
    await db.refresh(product)
    logger.info("Created product %s (%s)", product.id, product.name)
    return product


async def update_product(
    db: AsyncSession,
    product_id: UUID,
    data: ProductUpdate,
) -> Product:
    product = await get_product(db, product_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field in REQUIRED_FIELDS:
            raise ValidationFailed(f"{field} cannot be empty")
        setattr(product, field, value)

    await db.commit()
    await db.refresh(product)
    logger.info("Updated product %s", product.id)
    return product


async def delete_product(db: AsyncSession, product_id: UUID) -> None:
    product = await get_product(db, product_id)

    await db.delete(product)
    await db.commit()
    logger.info("Deleted product %s (%s)", product_id, product.name)


async def dashboard_stats(
    db: AsyncSession,
    now: Optional[datetime] = None,
) -> DashboardStats:
    total_products = await products_repo.count_products(db)
    low_stock = await products_repo.count_low_stock(db, settings.LOW_STOCK_THRESHOLD)
    summary = await build_daily_report(db, now)

    return DashboardStats(
        total_products=total_products,
        low_stock_products=low_stock,
        today_sales=summary.sales_count,
        today_revenue=summary.total_revenue,
    )
