# stall_pos/domain/cart/cart.py
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from stall_pos.domain.catalog.schemas import ProductOut


class CartLine(BaseModel):
    product: ProductOut
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return self.product.price * self.quantity


class Cart:
    """Products picked for the sale in progress, in the order they were added.

    A line never holds more than the stock its product snapshot reports.
    Requests that would break that are ignored rather than raised, the same
    way a disabled "+" button would behave.
    """

    def __init__(self):
        self._lines: List[CartLine] = []

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)

    def _find(self, product_id: UUID) -> Optional[CartLine]:
        for line in self._lines:
            if line.product.id == product_id:
                return line
        return None

    def add(self, product: ProductOut, qty: int = 1) -> None:
        if qty < 1:
            raise ValueError("qty must be positive")

        line = self._find(product.id)
        if line is None:
            quantity = min(qty, product.stock_quantity)
            if quantity > 0:
                self._lines.append(CartLine(product=product, quantity=quantity))
            return

        line.product = product
        line.quantity = min(line.quantity + qty, product.stock_quantity)
        if line.quantity <= 0:
            self.remove(product.id)

    def set_quantity(
        self,
        product_id: UUID,
        qty: int,
        product: Optional[ProductOut] = None,
    ) -> None:
        """Set a line to exactly `qty` units.

        `product` is the current snapshot from the catalog; when given it
        replaces the line's snapshot before the stock check, and a line left
        above the new stock is cut down to it.
        """
        if qty == 0:
            self.remove(product_id)
            return

        line = self._find(product_id)
        if line is None:
            return

        if product is not None:
            line.product = product
            if line.quantity > product.stock_quantity:
                line.quantity = product.stock_quantity
            if line.quantity <= 0:
                self.remove(product_id)
                return

        if qty < 0 or qty > line.product.stock_quantity:
            return
        line.quantity = qty

    def remove(self, product_id: UUID) -> None:
        self._lines = [line for line in self._lines if line.product.id != product_id]

    def total(self) -> Decimal:
        return sum((line.subtotal for line in self._lines), Decimal("0"))

    def clear(self) -> None:
        self._lines = []


class CartRegistry:
    """One cart per operator, kept in process memory only."""

    def __init__(self):
        self._carts: Dict[UUID, Cart] = {}

    def get(self, user_id: UUID) -> Cart:
        cart = self._carts.get(user_id)
        if cart is None:
            cart = self._carts[user_id] = Cart()
        return cart

    def drop(self, user_id: UUID) -> None:
        self._carts.pop(user_id, None)
