# stall_pos/api/v1/routes_reports.py
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from stall_pos.api.deps import get_current_session
from stall_pos.core.config import settings
from stall_pos.db.base import get_db
from stall_pos.domain.reports.schemas import DailySummary, TodaySale
from stall_pos.domain.reports.service import build_daily_report, list_today_sales
from stall_pos.domain.reports.share import format_share_message, share_link


router = APIRouter(
    prefix="/api/v1/reports",
    tags=["reports"],
    dependencies=[Depends(get_current_session)],
)


class ShareOut(BaseModel):
    message: str
    url: str


@router.get("/daily", response_model=DailySummary)
async def daily_report_endpoint(db: AsyncSession = Depends(get_db)):
    summary = await build_daily_report(db)
    summary.products = summary.top_products()
    return summary


@router.get("/daily/share", response_model=ShareOut)
async def daily_share_endpoint(db: AsyncSession = Depends(get_db)):
    summary = await build_daily_report(db)
    message = format_share_message(summary, top_n=settings.REPORT_TOP_N)
    return ShareOut(message=message, url=share_link(message))


@router.get("/daily/sales", response_model=List[TodaySale])
async def daily_sales_endpoint(db: AsyncSession = Depends(get_db)):
    return await list_today_sales(db)
