import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, Text, Uuid
from sqlalchemy.sql import func

from stall_pos.db.base import Base


class Product(Base):
    __tablename__ = "products"

    """A sellable item of the counter's catalog.

    Price and stock are the live values; sales copy the price into their
    lines so later edits never rewrite history.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False)
    barcode = Column(String, nullable=True, index=True)
    image_base64 = Column(Text, nullable=True)

    price = Column(Numeric(12, 2), nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock_quantity >= 0", name="ck_products_stock_non_negative"),
    )
