"""
Timeline controller: timelines, milestones and tasks.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.timeline import (
    TimelineCreate,
    TimelineUpdate,
    TimelineResponse,
    ProjectTimelineResponse,
    MilestoneCreate,
    MilestoneUpdate,
    MilestoneResponse,
    MilestoneDeleteResponse,
    TaskCreate,
    TaskUpdate,
    TaskResponse,
)
from app.services.timeline_service import TimelineService


class TimelineController(BaseController):
    """Controller for timeline operations."""

    def __init__(self, session: AsyncSession):
        self.timeline_service = TimelineService(session)

    async def get_project_timeline(self, project_id: UUID) -> ProjectTimelineResponse:
        return await self.timeline_service.get_project_timeline(project_id)

    async def create_project_timeline(self, project_id: UUID, timeline_data: TimelineCreate) -> TimelineResponse:
        return await self.timeline_service.create_project_timeline(project_id, timeline_data)

    async def update_project_timeline(self, project_id: UUID, timeline_data: TimelineUpdate) -> TimelineResponse:
        return await self.timeline_service.update_project_timeline(project_id, timeline_data)

    async def delete_project_timeline(self, project_id: UUID) -> bool:
        return await self.timeline_service.delete_project_timeline(project_id)

    async def get_timeline(self, timeline_id: UUID) -> Optional[TimelineResponse]:
        return await self.timeline_service.get_timeline(timeline_id)

    async def update_timeline(self, timeline_id: UUID, timeline_data: TimelineUpdate) -> Optional[TimelineResponse]:
        return await self.timeline_service.update_timeline(timeline_id, timeline_data)

    async def delete_timeline(self, timeline_id: UUID) -> bool:
        return await self.timeline_service.delete_timeline(timeline_id)

    async def list_milestones(self, timeline_id: UUID) -> List[MilestoneResponse]:
        return await self.timeline_service.list_milestones(timeline_id)

    async def create_milestone(self, timeline_id: UUID, milestone_data: MilestoneCreate) -> MilestoneResponse:
        return await self.timeline_service.create_milestone(timeline_id, milestone_data)

    async def update_milestone(
        self,
        timeline_id: UUID,
        milestone_id: UUID,
        milestone_data: MilestoneUpdate,
    ) -> Optional[MilestoneResponse]:
        return await self.timeline_service.update_milestone(timeline_id, milestone_id, milestone_data)

    async def delete_milestone(self, timeline_id: UUID, milestone_id: UUID) -> Optional[MilestoneDeleteResponse]:
        return await self.timeline_service.delete_milestone(timeline_id, milestone_id)

    async def list_tasks(self, timeline_id: UUID) -> List[TaskResponse]:
        return await self.timeline_service.list_tasks(timeline_id)

    async def create_task(self, timeline_id: UUID, task_data: TaskCreate) -> TaskResponse:
        return await self.timeline_service.create_task(timeline_id, task_data)

    async def update_task(self, timeline_id: UUID, task_id: UUID, task_data: TaskUpdate) -> Optional[TaskResponse]:
        return await self.timeline_service.update_task(timeline_id, task_id, task_data)

    async def delete_task(self, timeline_id: UUID, task_id: UUID) -> bool:
        return await self.timeline_service.delete_task(timeline_id, task_id)
