# stall_pos/domain/session/service.py
import logging
from typing import Dict, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.db.repositories.users import get_user_by_id
from stall_pos.domain.cart.cart import CartRegistry
from stall_pos.domain.errors import AuthError, PermissionDenied
from .schemas import OperatorSession

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Cached operator sessions keyed by user id.

    The cache is advisory: `resolve` always checks the users table, replaces
    an entry that no longer matches it and drops one whose user is gone.
    """

    def __init__(self, carts: Optional[CartRegistry] = None):
        self._sessions: Dict[UUID, OperatorSession] = {}
        self._carts = carts

    def cached(self, user_id: UUID) -> Optional[OperatorSession]:
        return self._sessions.get(user_id)

    async def resolve(self, db: AsyncSession, user_id: UUID) -> OperatorSession:
        user = await get_user_by_id(db, user_id)
        if user is None:
            self.invalidate(user_id)
            raise AuthError("Unknown operator")

        current = OperatorSession(
            user_id=user.id,
            email=user.email,
            name=user.name,
            role=user.role,
        )
        cached = self._sessions.get(user_id)
        if cached != current:
            if cached is not None:
                logger.info("Refreshing stale session for user %s", user_id)
            self._sessions[user_id] = current
        return current

    def invalidate(self, user_id: UUID) -> None:
        """Sign-out: forget the session and the operator's cart."""
        if self._sessions.pop(user_id, None) is not None:
            logger.info("Signed out user %s", user_id)
        if self._carts is not None:
            self._carts.drop(user_id)


def require_admin(session: OperatorSession) -> OperatorSession:
    if not session.is_admin:
        raise PermissionDenied("Administrator role required")
    return session
