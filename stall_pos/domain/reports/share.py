# stall_pos/domain/reports/share.py
from typing import Optional
from urllib.parse import quote

from stall_pos.core.config import settings
from stall_pos.db.models.sales import PaymentMethod
from stall_pos.domain.checkout.receipt import money
from .schemas import DailySummary

SHARE_URL = "https://api.whatsapp.com/send"


def format_share_message(
    summary: DailySummary,
    currency: Optional[str] = None,
    top_n: Optional[int] = None,
) -> str:
    """Plain-text day summary meant to be pasted into a chat."""
    currency = currency or settings.CURRENCY_SYMBOL
    top_n = settings.REPORT_TOP_N if top_n is None else top_n

    lines = [
        f"*DAILY REPORT - {summary.day:%d/%m/%Y}*",
        "",
        f"*Sales:* {summary.sales_count}",
        f"*Revenue:* {money(summary.total_revenue, currency)}",
        "",
        "*PAYMENT METHODS:*",
    ]
    for method in PaymentMethod:
        lines.append(f"{method.label}: {money(summary.payment_totals[method], currency)}")

    top = summary.top_products(top_n)
    if top:
        lines += ["", "*TOP PRODUCTS:*"]
        for product in top:
            lines.append(f"- {product.name}: {product.quantity}x ({money(product.revenue, currency)})")

    return "\n".join(lines) + "\n"


def share_link(message: str, phone: Optional[str] = None) -> str:
    phone = settings.SHARE_PHONE if phone is None else phone
    query = f"text={quote(message, safe='')}"
    if phone:
        query = f"phone={phone}&{query}"
    return f"{SHARE_URL}?{query}"
