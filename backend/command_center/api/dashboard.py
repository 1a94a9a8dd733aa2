"""
Dashboard endpoints: home metrics, sidebar badges, health check.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.database import get_db
from command_center.schemas.dashboard import DashboardResponse, SidebarCounts
from command_center.services import metrics

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=DashboardResponse)
async def dashboard(db: AsyncSession = Depends(get_db)):
    """
    Home view: headline counts and recent student activity.

    Never fails on database errors: counts fall back to zero and
    `degraded` is set so the page can show a notice.
    """
    metrics_outcome = await metrics.dashboard_metrics(db)
    activity_outcome = await metrics.recent_activity(db)
    return DashboardResponse(
        metrics=metrics_outcome.value,
        recent_activity=activity_outcome.value,
        degraded=metrics_outcome.is_degraded or activity_outcome.is_degraded,
    )


@router.get("/sidebar", response_model=SidebarCounts)
async def sidebar(db: AsyncSession = Depends(get_db)):
    """Pending/approved/total counts shown next to the navigation links."""
    return (await metrics.sidebar_counts(db)).value


@router.get("/api/health")
async def health_check():
    """Simple health check endpoint."""
    return {
        "status": "healthy",
        "service": "Command Center API",
        "version": "1.0.0",
    }
