# /app/routers/dashboard_router.py

from fastapi import APIRouter, Depends, Query

from ..models.dashboard_model import DashboardSnapshot, FinancialOverview, RecentActivity, SiteStats, TimeRange
from ..services import dashboard_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.get(
    "/snapshot",
    response_model=DashboardSnapshot,
    summary="Get Dashboard Snapshot",
    description="Counts, this month's figures, six-month trends and group rankings for the admin home screen.",
)
async def get_dashboard_snapshot(db: DatabaseService = Depends(get_db_service)):
    # Thin router: the service never raises for data reasons.
    return await dashboard_service.get_dashboard_snapshot(db)


@router.get("/financial-overview", response_model=FinancialOverview, summary="Get Course Revenue Overview")
async def get_financial_overview(
    range: TimeRange = Query(default="30d"),
    payout_rate: float = Query(default=0.35, ge=0, le=1),
    db: DatabaseService = Depends(get_db_service),
):
    return await dashboard_service.get_financial_overview(db, time_range=range, payout_rate=payout_rate)


@router.get("/stats", response_model=SiteStats, summary="Get Site Content Counts")
async def get_site_stats(db: DatabaseService = Depends(get_db_service)):
    return await dashboard_service.get_site_stats(db)


@router.get("/recent", response_model=RecentActivity, summary="Get Latest Applications and Courses")
async def get_recent_activity(
    limit: int = Query(default=5, ge=1, le=50),
    db: DatabaseService = Depends(get_db_service),
):
    return await dashboard_service.get_recent_activity(db, limit=limit)
