import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, Numeric, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from stall_pos.db.base import Base
from stall_pos.db.models.products import Product


class SaleItem(Base):
    __tablename__ = "sale_items"

    """One product line within a sale.

    Quantity and unit price are frozen at the time of sale. The product
    reference is a plain back-reference: deleting the product nulls it and
    the line stays for reporting.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sale_id = Column(Uuid(as_uuid=True), ForeignKey("sales.id", ondelete="CASCADE"), nullable=False)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="SET NULL"), nullable=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    subtotal = Column(Numeric(12, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    product = relationship(Product, lazy="raise")

    __table_args__ = (
        Index("ix_sale_items_sale", "sale_id"),
    )
