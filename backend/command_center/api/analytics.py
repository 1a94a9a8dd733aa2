"""
Analytics endpoint (admin only).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from command_center.api.auth import require_admin
from command_center.database import get_db
from command_center.schemas.dashboard import AnalyticsResponse
from command_center.services.metrics import analytics_overview

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("", response_model=AnalyticsResponse)
async def analytics(db: AsyncSession = Depends(get_db)):
    """Program health score and status breakdowns. Zeroed on database errors."""
    return (await analytics_overview(db)).value
