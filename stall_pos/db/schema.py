# stall_pos/db/schema.py
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from stall_pos.db.base import Base, engine
# Imported for their side effect of registering tables on Base.metadata
from stall_pos.db.models import products, sale_items, sales, users  # noqa: F401

logger = logging.getLogger(__name__)


async def init_models(bind: AsyncEngine = engine) -> None:
    """Create any missing tables; existing ones are left untouched."""
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
