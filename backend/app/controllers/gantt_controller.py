"""
Gantt controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.gantt import GanttResponse
from app.services.gantt_service import GanttService, GanttQuery


class GanttController(BaseController):
    """Controller for the global Gantt chart."""

    def __init__(self, session: AsyncSession):
        self.gantt_service = GanttService(session)

    async def get_chart(self, query: GanttQuery) -> GanttResponse:
        return await self.gantt_service.get_chart(query)
