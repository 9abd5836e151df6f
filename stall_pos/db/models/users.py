import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, String, Uuid
from sqlalchemy.sql import func

from stall_pos.db.base import Base


class Role(str, enum.Enum):
    ADMIN = "admin"
    ATTENDANT = "attendant"


class User(Base):
    __tablename__ = "users"

    """Operator profile for an identity issued by the auth provider.

    The id is the auth provider's user id; the row carries the display name
    and the role that decides whether the operator may manage the catalog.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    role = Column(
        Enum(Role, name="user_role_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=Role.ATTENDANT,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
