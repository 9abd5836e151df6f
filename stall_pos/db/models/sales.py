import enum
import uuid

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Index, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from stall_pos.db.base import Base
from stall_pos.db.models.sale_items import SaleItem
from stall_pos.db.models.users import User  # noqa: F401


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    DEBIT = "debit"
    CREDIT = "credit"
    QRCODE = "qrcode"

    @property
    def label(self) -> str:
        return PAYMENT_METHOD_LABELS[self]


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH: "Cash",
    PaymentMethod.DEBIT: "Debit card",
    PaymentMethod.CREDIT: "Credit card",
    PaymentMethod.QRCODE: "QR code / PIX",
}


class Sale(Base):
    __tablename__ = "sales"

    """A completed sale at the counter (receipt header).

    Created once by checkout and never updated. The total equals the sum of
    its line subtotals and created_at is the absolute instant of the sale.
    """

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    client_name = Column(String, nullable=True)

    total_amount = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(
        Enum(PaymentMethod, name="payment_method_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    created_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship(SaleItem, lazy="raise")

    __table_args__ = (
        Index("ix_sales_created_at", "created_at"),
    )
