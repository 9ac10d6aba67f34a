"""
Dashboard controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.dashboard import DashboardAnalytics
from app.services.dashboard_service import DashboardService


class DashboardController(BaseController):
    """Controller for dashboard analytics."""

    def __init__(self, session: AsyncSession):
        self.dashboard_service = DashboardService(session)

    async def get_analytics(self) -> DashboardAnalytics:
        return await self.dashboard_service.get_analytics()
