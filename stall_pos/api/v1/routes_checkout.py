# stall_pos/api/v1/routes_checkout.py
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession


from stall_pos.api.deps import get_cart, get_catalog, get_current_session
from stall_pos.db.base import get_db
from stall_pos.domain.cart.cart import Cart
from stall_pos.domain.catalog.store import CatalogStore
from stall_pos.domain.checkout.receipt import render_receipt
from stall_pos.domain.checkout.schemas import CheckoutRequest, CheckoutResult, ReceiptRequest
from stall_pos.domain.checkout.service import checkout, get_sale
from stall_pos.domain.session.schemas import OperatorSession


router = APIRouter(prefix="/api/v1/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutResult, status_code=201)
async def checkout_endpoint(
    payload: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
    cart: Cart = Depends(get_cart),
    session: OperatorSession = Depends(get_current_session),
    catalog: CatalogStore = Depends(get_catalog),
):
    return await checkout(db, cart, payload, session, catalog=catalog)


@router.post("/receipt", response_class=HTMLResponse, dependencies=[Depends(get_current_session)])
async def receipt_endpoint(
    payload: ReceiptRequest,
    db: AsyncSession = Depends(get_db),
):
    result = await get_sale(db, payload.sale_id)
    return HTMLResponse(render_receipt(result, payload.client_name, payload.cash_received))
