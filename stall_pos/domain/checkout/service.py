# stall_pos/domain/checkout/service.py
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.core.config import settings
from stall_pos.core.time_utils import as_utc, business_now
from stall_pos.db.models.sale_items import SaleItem
from stall_pos.db.models.sales import PaymentMethod, Sale
from stall_pos.db.repositories.products import decrement_stock
from stall_pos.db.repositories.sales import get_sale_with_items
from stall_pos.domain.cart.cart import Cart
from stall_pos.domain.catalog.store import CatalogStore
from stall_pos.domain.errors import (
    CheckoutFailedError,
    EmptyCartError,
    InsufficientStockError,
    NotFoundError,
    ValidationFailed,
)
from stall_pos.domain.session.schemas import OperatorSession
from .schemas import CheckoutRequest, CheckoutResult, SaleLineOut, SaleOut

logger = logging.getLogger(__name__)


def compute_change(
    payment_method: PaymentMethod,
    total: Decimal,
    cash_received: Optional[Decimal],
) -> Optional[Decimal]:
    if payment_method != PaymentMethod.CASH or cash_received is None:
        return None
    return cash_received - total


def check_cash_received(
    payment_method: PaymentMethod,
    total: Decimal,
    cash_received: Optional[Decimal],
) -> None:
    if cash_received is None:
        return
    if payment_method != PaymentMethod.CASH:
        raise ValidationFailed("Cash received only applies to cash payments")
    if cash_received < total:
        raise ValidationFailed("Cash received is less than the total")


def validate_checkout(cart: Cart, data: CheckoutRequest) -> None:
    """Local checks; nothing reaches the database when these fail."""
    if cart.is_empty:
        raise EmptyCartError()

    if settings.REQUIRE_CLIENT_NAME and not (data.client_name or "").strip():
        raise ValidationFailed("Client name is required")

    check_cash_received(data.payment_method, cart.total(), data.cash_received)


async def create_sale(
    db: AsyncSession,
    session: OperatorSession,
    data: CheckoutRequest,
    total_amount: Decimal,
    created_at: datetime,
) -> Sale:
    sale = Sale(
        user_id=session.user_id,
        client_name=(data.client_name or "").strip() or None,
        payment_method=data.payment_method,
        total_amount=total_amount,
        created_at=as_utc(created_at),
    )
    db.add(sale)
    await db.flush()
    return sale


async def add_sale_lines(
    db: AsyncSession,
    sale: Sale,
    cart: Cart,
) -> List[SaleLineOut]:
    items = []
    out = []
    for line in cart.lines:
        unit_price = line.product.price
        item = SaleItem(
            sale_id=sale.id,
            product_id=line.product.id,
            quantity=line.quantity,
            unit_price=unit_price,
            subtotal=unit_price * line.quantity,
        )
        items.append(item)

    db.add_all(items)
    await db.flush()

    for item, line in zip(items, cart.lines):
        out.append(SaleLineOut(
            id=item.id,
            product_id=item.product_id,
            product_name=line.product.name,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
        ))
    return out


async def decrement_cart_stock(db: AsyncSession, cart: Cart) -> None:
    for line in cart.lines:
        if not await decrement_stock(db, line.product.id, line.quantity):
            raise InsufficientStockError(line.product.id, line.quantity)


async def checkout(
    db: AsyncSession,
    cart: Cart,
    data: CheckoutRequest,
    session: OperatorSession,
    catalog: Optional[CatalogStore] = None,
    now: Optional[datetime] = None,
) -> CheckoutResult:
    """Turn the cart into a stored sale.

    The sale row, its lines and the stock decrements are written in one
    transaction; any failure rolls all of them back and leaves the cart as
    it was.
    """
    validate_checkout(cart, data)

    total_amount = cart.total()
    created_at = now or business_now(settings.business_tz)

    step = "creating the sale"
    try:
        sale = await create_sale(db, session, data, total_amount, created_at)

        step = "adding the sale lines"
        lines = await add_sale_lines(db, sale, cart)

        step = "updating stock"
        await decrement_cart_stock(db, cart)

        step = "committing"
        await db.commit()
    except InsufficientStockError as exc:
        await db.rollback()
        logger.error("Checkout aborted: %s", exc)
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("Checkout failed while %s", step)
        raise CheckoutFailedError(step, exc) from exc

    logger.info(
        "Recorded sale %s: %d line(s), total %s, %s",
        sale.id, len(lines), total_amount, data.payment_method.value,
    )

    result = CheckoutResult(
        sale=SaleOut.model_validate(sale),
        lines=lines,
        change_due=compute_change(data.payment_method, total_amount, data.cash_received),
    )

    cart.clear()
    if catalog is not None:
        await catalog.refresh(db)
    return result


async def get_sale(db: AsyncSession, sale_id) -> CheckoutResult:
    sale = await get_sale_with_items(db, sale_id)
    if sale is None:
        raise NotFoundError("Sale not found")

    lines = [
        SaleLineOut(
            id=item.id,
            product_id=item.product_id,
            product_name=item.product.name if item.product is not None else None,
            quantity=item.quantity,
            unit_price=item.unit_price,
            subtotal=item.subtotal,
        )
        for item in sale.items
    ]
    return CheckoutResult(sale=SaleOut.model_validate(sale), lines=lines)
