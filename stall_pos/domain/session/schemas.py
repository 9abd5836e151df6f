# stall_pos/domain/session/schemas.py
from pydantic import BaseModel
from uuid import UUID

from stall_pos.db.models.users import Role


class OperatorSession(BaseModel):
    """Identity of the operator at the counter, as the users table has it."""

    user_id: UUID
    email: str
    name: str
    role: Role

    class Config:
        frozen = True

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
