"""
Dashboard analytics endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_db
from app.controllers.dashboard_controller import DashboardController
from app.schemas.dashboard import DashboardAnalytics

router = APIRouter()


@router.get("", response_model=DashboardAnalytics)
async def get_dashboard_analytics(
    db: AsyncSession = Depends(get_db),
) -> DashboardAnalytics:
    """Catalog, template, project and user figures for the dashboard."""
    controller = DashboardController(db)
    return await controller.get_analytics()
