"""Dashboard Routes — metrics, recent clients and upcoming action deadlines."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from argan_hr.api.dependencies import get_current_admin
from argan_hr.config import get_settings
from argan_hr.core import clock
from argan_hr.infrastructure.database import get_db
from argan_hr.models.admin import Admin
from argan_hr.schemas.dashboard import ActionDeadline, DashboardMetrics, RecentClient
from argan_hr.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/v1/dashboard", tags=["dashboard"])


@router.get("/metrics", response_model=DashboardMetrics)
async def get_metrics(
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await DashboardService(db).get_metrics(
        clock.today(), get_settings().renewal_window_days,
    )


@router.get("/recent-clients", response_model=list[RecentClient])
async def recent_clients(
    limit: int = Query(5, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await DashboardService(db).recent_clients(limit)


@router.get("/actions", response_model=list[ActionDeadline])
async def actions_with_deadlines(
    limit: int | None = Query(None, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
    _: Admin = Depends(get_current_admin),
):
    return await DashboardService(db).actions_with_deadlines(clock.today(), limit)
