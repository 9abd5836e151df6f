# stall_pos/api/deps.py
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.db.base import get_db
from stall_pos.domain.cart.cart import Cart, CartRegistry
from stall_pos.domain.catalog.store import CatalogStore
from stall_pos.domain.session.schemas import OperatorSession
from stall_pos.domain.session.service import SessionRegistry, require_admin

# Process-local state: one catalog snapshot, one cart per operator
catalog_store = CatalogStore()
cart_registry = CartRegistry()
session_registry = SessionRegistry(carts=cart_registry)


def get_catalog() -> CatalogStore:
    return catalog_store


def get_carts() -> CartRegistry:
    return cart_registry


def get_sessions() -> SessionRegistry:
    return session_registry


async def get_current_session(
    x_user_id: UUID = Header(...),
    db: AsyncSession = Depends(get_db),
    sessions: SessionRegistry = Depends(get_sessions),
) -> OperatorSession:
    # The auth provider in front of the service sets X-User-Id
    return await sessions.resolve(db, x_user_id)


async def get_admin_session(
    session: OperatorSession = Depends(get_current_session),
) -> OperatorSession:
    return require_admin(session)


def get_cart(
    session: OperatorSession = Depends(get_current_session),
    carts: CartRegistry = Depends(get_carts),
) -> Cart:
    return carts.get(session.user_id)
