# stall_pos/domain/catalog/store.py
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.db.repositories.products import list_products
from .schemas import ProductOut


class CatalogStore:
    """In-memory list of sellable products, as last fetched from the database.

    Only products with stock are kept. Nothing is invalidated automatically;
    callers refresh after anything that changes stock.
    """

    def __init__(self):
        self._products: List[ProductOut] = []
        self._by_id: Dict[UUID, ProductOut] = {}

    @property
    def products(self) -> List[ProductOut]:
        return list(self._products)

    async def refresh(self, db: AsyncSession) -> List[ProductOut]:
        rows = await list_products(db, in_stock_only=True)
        self._products = [ProductOut.model_validate(row) for row in rows]
        self._by_id = {p.id: p for p in self._products}
        return self.products

    def search(self, term: Optional[str] = None) -> List[ProductOut]:
        needle = (term or "").strip().lower()
        if not needle:
            return self.products
        return [
            p for p in self._products
            if needle in p.name.lower() or needle in p.category.lower()
        ]

    def get(self, product_id: UUID) -> Optional[ProductOut]:
        return self._by_id.get(product_id)
