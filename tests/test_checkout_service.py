from datetime import datetime, timezone
from decimal import Decimal

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import OperationalError

from stall_pos.core.config import settings
from stall_pos.db.models.products import Product
from stall_pos.db.models.sale_items import SaleItem
from stall_pos.db.models.sales import PaymentMethod, Sale
from stall_pos.db.repositories.products import get_product_by_id
from stall_pos.domain.cart.cart import Cart
from stall_pos.domain.catalog.store import CatalogStore
from stall_pos.domain.checkout import service as checkout_service
from stall_pos.domain.checkout.schemas import CheckoutRequest
from stall_pos.domain.checkout.service import checkout, get_sale
from stall_pos.domain.errors import (
    CheckoutFailedError,
    EmptyCartError,
    InsufficientStockError,
    ValidationFailed,
)
from tests.conftest import snapshot


async def count(db, model) -> int:
    return await db.scalar(select(func.count(model.id)))


@pytest.fixture
async def stocked_cart(make_product):
    pastel = await make_product("Pastel de carne", "5.00", 10)
    juice = await make_product("Caldo de cana", "3.50", 4, category="Bebida")

    cart = Cart()
    cart.add(snapshot(pastel), qty=2)
    cart.add(snapshot(juice))
    return cart, pastel, juice


async def test_checkout_records_sale_and_lines(db, attendant_session, stocked_cart):
    cart, pastel, juice = stocked_cart

    result = await checkout(db, cart, CheckoutRequest(payment_method=PaymentMethod.CASH), attendant_session)

    assert result.sale.total_amount == Decimal("13.50")
    assert result.sale.payment_method == PaymentMethod.CASH
    assert result.sale.user_id == attendant_session.user_id
    assert [(line.product_id, line.subtotal) for line in result.lines] == [
        (pastel.id, Decimal("10.00")),
        (juice.id, Decimal("3.50")),
    ]
    assert sum(line.subtotal for line in result.lines) == result.sale.total_amount

    stored = await get_sale(db, result.sale.id)
    assert stored.sale.total_amount == Decimal("13.50")
    assert sorted(line.subtotal for line in stored.lines) == [Decimal("3.50"), Decimal("10.00")]


async def test_checkout_decrements_stock_and_clears_cart(db, attendant_session, stocked_cart):
    cart, pastel, juice = stocked_cart
    catalog = CatalogStore()

    await checkout(db, cart, CheckoutRequest(), attendant_session, catalog=catalog)

    assert cart.is_empty
    assert (await get_product_by_id(db, pastel.id)).stock_quantity == 8
    assert (await get_product_by_id(db, juice.id)).stock_quantity == 3
    assert catalog.get(pastel.id).stock_quantity == 8


async def test_sold_out_product_leaves_catalog(db, attendant_session, make_product):
    last_one = await make_product("Pastel de queijo", "6.00", 1)
    cart = Cart()
    cart.add(snapshot(last_one))
    catalog = CatalogStore()

    await checkout(db, cart, CheckoutRequest(), attendant_session, catalog=catalog)

    assert catalog.get(last_one.id) is None


async def test_unit_price_is_frozen_at_sale_time(db, attendant_session, stocked_cart):
    cart, pastel, _ = stocked_cart
    result = await checkout(db, cart, CheckoutRequest(), attendant_session)

    await db.execute(update(Product).where(Product.id == pastel.id).values(price=Decimal("9.00")))
    await db.commit()

    stored = await get_sale(db, result.sale.id)
    line = next(line for line in stored.lines if line.product_id == pastel.id)
    assert line.unit_price == Decimal("5.00")
    assert line.subtotal == Decimal("10.00")


async def test_created_at_is_the_sale_instant(db, attendant_session, stocked_cart):
    cart, _, _ = stocked_cart
    now = datetime(2026, 10, 19, 22, 30, tzinfo=settings.business_tz)

    result = await checkout(db, cart, CheckoutRequest(), attendant_session, now=now)

    stored = await get_sale(db, result.sale.id)
    assert stored.sale.created_at == now.astimezone(timezone.utc)


async def test_empty_cart_is_rejected_before_any_write(db, attendant_session):
    with pytest.raises(EmptyCartError):
        await checkout(db, Cart(), CheckoutRequest(), attendant_session)
    assert await count(db, Sale) == 0


async def test_cash_change_is_returned_not_stored(db, attendant_session, stocked_cart):
    cart, _, _ = stocked_cart
    data = CheckoutRequest(payment_method=PaymentMethod.CASH, cash_received=Decimal("20.00"))

    result = await checkout(db, cart, data, attendant_session)

    assert result.change_due == Decimal("6.50")
    assert not hasattr(Sale, "cash_received")


async def test_cash_received_below_total_is_rejected(db, attendant_session, stocked_cart):
    cart, _, _ = stocked_cart
    data = CheckoutRequest(payment_method=PaymentMethod.CASH, cash_received=Decimal("10.00"))

    with pytest.raises(ValidationFailed):
        await checkout(db, cart, data, attendant_session)
    assert len(cart) == 2
    assert await count(db, Sale) == 0


async def test_client_name_required_when_configured(db, attendant_session, stocked_cart, monkeypatch):
    cart, _, _ = stocked_cart
    monkeypatch.setattr(settings, "REQUIRE_CLIENT_NAME", True)

    with pytest.raises(ValidationFailed):
        await checkout(db, cart, CheckoutRequest(client_name="  "), attendant_session)

    result = await checkout(db, cart, CheckoutRequest(client_name=" Maria "), attendant_session)
    assert result.sale.client_name == "Maria"


async def test_insufficient_stock_rolls_back_everything(db, attendant_session, stocked_cart):
    cart, pastel, juice = stocked_cart
    pastel_id = pastel.id
    # Another counter sold the last juices after this cart was built
    await db.execute(update(Product).where(Product.id == juice.id).values(stock_quantity=0))
    await db.commit()

    with pytest.raises(InsufficientStockError):
        await checkout(db, cart, CheckoutRequest(), attendant_session)

    assert await count(db, Sale) == 0
    assert await count(db, SaleItem) == 0
    assert (await get_product_by_id(db, pastel_id)).stock_quantity == 10
    assert len(cart) == 2


async def test_backend_failure_rolls_back_and_keeps_cart(db, attendant_session, stocked_cart, monkeypatch):
    cart, pastel, _ = stocked_cart
    pastel_id = pastel.id

    async def broken(*args, **kwargs):
        raise OperationalError("UPDATE products", {}, Exception("connection lost"))

    monkeypatch.setattr(checkout_service, "decrement_stock", broken)

    with pytest.raises(CheckoutFailedError) as excinfo:
        await checkout(db, cart, CheckoutRequest(), attendant_session)

    assert excinfo.value.step == "updating stock"
    assert await count(db, Sale) == 0
    assert (await get_product_by_id(db, pastel_id)).stock_quantity == 10
    assert len(cart) == 2
