
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from stall_pos.db.models.users import User


async def get_user_by_id(
    db: AsyncSession,
    user_id: UUID
) -> Optional[User]:
    result = await db.execute(
        select(User)
        .where(User.id == user_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()
