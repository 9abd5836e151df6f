# stall_pos/api/v1/routes_cart.py
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.api.deps import get_cart, get_catalog
from stall_pos.db.base import get_db
from stall_pos.domain.cart.cart import Cart
from stall_pos.domain.cart.schemas import CartItemAdd, CartLineOut, CartOut, CartQuantity
from stall_pos.domain.catalog.store import CatalogStore
from stall_pos.domain.errors import NotFoundError


router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


def cart_out(cart: Cart) -> CartOut:
    return CartOut(
        lines=[
            CartLineOut(product=line.product, quantity=line.quantity, subtotal=line.subtotal)
            for line in cart.lines
        ],
        total=cart.total(),
    )


@router.get("", response_model=CartOut)
async def get_cart_endpoint(cart: Cart = Depends(get_cart)):
    return cart_out(cart)


@router.post("/items", response_model=CartOut)
async def add_item_endpoint(
    payload: CartItemAdd,
    cart: Cart = Depends(get_cart),
    catalog: CatalogStore = Depends(get_catalog),
    db: AsyncSession = Depends(get_db),
):
    # Always pick up current stock before touching the cart
    await catalog.refresh(db)
    product = catalog.get(payload.product_id)
    if product is None:
        raise NotFoundError("Product not available")

    cart.add(product, payload.quantity)
    return cart_out(cart)


@router.put("/items/{product_id}", response_model=CartOut)
async def set_quantity_endpoint(
    product_id: UUID,
    payload: CartQuantity,
    cart: Cart = Depends(get_cart),
    catalog: CatalogStore = Depends(get_catalog),
    db: AsyncSession = Depends(get_db),
):
    await catalog.refresh(db)
    product = catalog.get(product_id)
    if product is None:
        # Sold out or deleted since it was added
        cart.remove(product_id)
    else:
        cart.set_quantity(product_id, payload.quantity, product)
    return cart_out(cart)


@router.delete("/items/{product_id}", response_model=CartOut)
async def remove_item_endpoint(
    product_id: UUID,
    cart: Cart = Depends(get_cart),
):
    cart.remove(product_id)
    return cart_out(cart)


@router.delete("", response_model=CartOut)
async def clear_cart_endpoint(cart: Cart = Depends(get_cart)):
    cart.clear()
    return cart_out(cart)
