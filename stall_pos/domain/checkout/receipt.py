# stall_pos/domain/checkout/receipt.py
from decimal import Decimal
from html import escape
from typing import Optional

from stall_pos.core.config import settings
from stall_pos.db.models.sales import PaymentMethod
from stall_pos.domain.reports.aggregator import UNKNOWN_PRODUCT
from .schemas import CheckoutResult
from .service import check_cash_received, compute_change


def money(amount: Decimal, currency: Optional[str] = None) -> str:
    return f"{currency or settings.CURRENCY_SYMBOL} {amount:.2f}"


def render_receipt(
    result: CheckoutResult,
    client_name: Optional[str] = None,
    cash_received: Optional[Decimal] = None,
) -> str:
    """HTML receipt handed to the browser's print window.

    Client name and cash received are never stored with the sale, so the
    caller passes them in explicitly.
    """
    sale = result.sale
    rows = "\n".join(
        "<tr><td>{name}</td><td>{qty}</td><td>{unit}</td><td>{sub}</td></tr>".format(
            name=escape(line.product_name or UNKNOWN_PRODUCT),
            qty=line.quantity,
            unit=money(line.unit_price),
            sub=money(line.subtotal),
        )
        for line in result.lines
    )

    name = client_name if client_name is not None else sale.client_name
    parts = [
        "<html><head><meta charset=\"utf-8\"><title>Receipt</title></head><body>",
        f"<h2>Receipt {escape(str(sale.id))[:8]}</h2>",
    ]
    if name:
        parts.append(f"<p>Client: {escape(name)}</p>")
    parts += [
        "<table>",
        "<tr><th>Product</th><th>Qty</th><th>Unit price</th><th>Subtotal</th></tr>",
        rows,
        "</table>",
        f"<p><strong>Total: {money(sale.total_amount)}</strong></p>",
        f"<p>Payment: {escape(sale.payment_method.label)}</p>",
    ]

    if sale.payment_method == PaymentMethod.CASH and cash_received is not None:
        check_cash_received(sale.payment_method, sale.total_amount, cash_received)
        change = compute_change(sale.payment_method, sale.total_amount, cash_received)
        parts.append(f"<p>Cash received: {money(cash_received)}</p>")
        parts.append(f"<p>Change: {money(change)}</p>")

    parts.append("</body></html>")
    return "\n".join(parts)
