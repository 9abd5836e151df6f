# stall_pos/api/v1/routes_products.py
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.api.deps import get_admin_session, get_catalog, get_current_session
from stall_pos.db.base import get_db
from stall_pos.domain.catalog import service as catalog_service
from stall_pos.domain.catalog.schemas import DashboardStats, ProductCreate, ProductOut, ProductUpdate
from stall_pos.domain.catalog.store import CatalogStore


router = APIRouter(prefix="/api/v1", tags=["catalog"])


@router.get("/catalog", response_model=List[ProductOut], dependencies=[Depends(get_current_session)])
async def catalog_endpoint(
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    catalog: CatalogStore = Depends(get_catalog),
):
    await catalog.refresh(db)
    return catalog.search(search)


@router.get("/products", response_model=List[ProductOut], dependencies=[Depends(get_admin_session)])
async def list_products_endpoint(db: AsyncSession = Depends(get_db)):
    return await catalog_service.list_products(db)


@router.get("/products/stats", response_model=DashboardStats, dependencies=[Depends(get_admin_session)])
async def dashboard_stats_endpoint(db: AsyncSession = Depends(get_db)):
    return await catalog_service.dashboard_stats(db)


@router.post("/products", response_model=ProductOut, status_code=201, dependencies=[Depends(get_admin_session)])
async def create_product_endpoint(
    payload: ProductCreate,
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.create_product(db, payload)


@router.patch("/products/{product_id}", response_model=ProductOut, dependencies=[Depends(get_admin_session)])
async def update_product_endpoint(
    product_id: UUID,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await catalog_service.update_product(db, product_id, payload)


@router.delete("/products/{product_id}", status_code=204, dependencies=[Depends(get_admin_session)])
async def delete_product_endpoint(
    product_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    await catalog_service.delete_product(db, product_id)
    return Response(status_code=204)
