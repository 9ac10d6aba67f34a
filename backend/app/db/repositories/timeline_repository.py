"""
Timeline, milestone and task repositories.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.project import Project
from app.models.timeline import Timeline, Milestone, Task


class TimelineRepository(BaseRepository[Timeline]):
    """Repository for timeline operations."""

    sortable_fields = ("start_date", "end_date", "created_at", "updated_at")

    def __init__(self, session: AsyncSession):
        super().__init__(Timeline, session)

    def load_options(self):
        return (
            selectinload(Timeline.project),
            selectinload(Timeline.milestones),
            selectinload(Timeline.tasks),
        )

    async def get_by_project(self, project_id: UUID) -> Optional[Timeline]:
        result = await self.session.execute(
            select(Timeline)
            .options(*self.load_options())
            .where(Timeline.project_id == project_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_all(self, project_id: Optional[UUID] = None) -> List[Timeline]:
        """Every timeline with its project, milestones and tasks loaded."""
        query = (
            select(Timeline)
            .join(Timeline.project)
            .options(*self.load_options())
            .order_by(Project.name, Timeline.start_date)
            .execution_options(populate_existing=True)
        )
        if project_id is not None:
            query = query.where(Timeline.project_id == project_id)
        result = await self.session.execute(query)
        return list(result.scalars().unique().all())

    async def delete_cascade(self, timeline_id: UUID) -> bool:
        """Delete a timeline with its tasks and milestones."""
        await self.session.execute(
            delete(Task).where(Task.timeline_id == timeline_id).execution_options(synchronize_session=False)
        )
        await self.session.execute(
            update(Milestone)
            .where(Milestone.timeline_id == timeline_id)
            .values(depends_on=None)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(Milestone).where(Milestone.timeline_id == timeline_id).execution_options(synchronize_session=False)
        )
        return await self.delete(timeline_id)


class MilestoneRepository(BaseRepository[Milestone]):
    """Repository for milestone operations."""

    sortable_fields = ("due_date", "name", "created_at")

    def __init__(self, session: AsyncSession):
        super().__init__(Milestone, session)

    async def list_for_timeline(self, timeline_id: UUID) -> List[Milestone]:
        result = await self.session.execute(
            select(Milestone)
            .where(Milestone.timeline_id == timeline_id)
            .order_by(Milestone.due_date, Milestone.name)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def delete_cascade(self, milestone_id: UUID) -> int:
        """Delete a milestone and its tasks; returns the number of tasks removed."""
        result = await self.session.execute(
            delete(Task).where(Task.milestone_id == milestone_id).execution_options(synchronize_session=False)
        )
        await self.session.execute(
            update(Milestone)
            .where(Milestone.depends_on == milestone_id)
            .values(depends_on=None)
            .execution_options(synchronize_session=False)
        )
        await self.delete(milestone_id)
        return result.rowcount


class TaskRepository(BaseRepository[Task]):
    """Repository for task operations."""

    sortable_fields = ("planned_start", "name", "created_at")

    def __init__(self, session: AsyncSession):
        super().__init__(Task, session)

    async def list_for_timeline(self, timeline_id: UUID) -> List[Task]:
        result = await self.session.execute(
            select(Task)
            .where(Task.timeline_id == timeline_id)
            .order_by(Task.planned_start, Task.name)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
