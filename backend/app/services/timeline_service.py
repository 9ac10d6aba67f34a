"""
Timeline service: project timelines, their milestones and their tasks.
"""

from datetime import date, timedelta
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, NotFoundException, ValidationException
from app.core.logging import get_logger
from app.db.repositories.project_repository import ProjectRepository
from app.db.repositories.timeline_repository import (
    TimelineRepository,
    MilestoneRepository,
    TaskRepository,
)
from app.models.timeline import Timeline, default_working_days
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
from app.services.base_service import BaseService

logger = get_logger(__name__)


def timeline_duration(start_date: date, end_date: Optional[date]) -> Optional[int]:
    """Length of a timeline in days; None while it has no end date."""
    if end_date is None:
        return None
    return (end_date - start_date).days


class TimelineService(BaseService):
    """Service for timeline, milestone and task operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.timeline_repo = TimelineRepository(session)
        self.milestone_repo = MilestoneRepository(session)
        self.task_repo = TaskRepository(session)

    def _to_response(self, timeline: Timeline) -> TimelineResponse:
        response = TimelineResponse.model_validate(timeline)
        response.project_name = timeline.project.name if timeline.project else None
        return response

    async def _require_timeline(self, timeline_id: UUID) -> Timeline:
        timeline = await self.timeline_repo.get(timeline_id)
        if not timeline:
            raise NotFoundException("Timeline not found", details={"timeline_id": str(timeline_id)})
        return timeline

    async def _require_project(self, project_id: UUID) -> None:
        if not await self.project_repo.exists(project_id):
            raise NotFoundException("Project not found", details={"project_id": str(project_id)})

    @staticmethod
    def _timeline_values(data: dict, start_date: date, end_date: Optional[date]) -> dict:
        if end_date is not None and end_date < start_date:
            raise ValidationException("Timeline end date must be on or after its start date")
        values = dict(data)
        if "holidays" in values and values["holidays"] is not None:
            values["holidays"] = sorted({day.isoformat() for day in values["holidays"]})
        if "working_days" in values and values["working_days"] is None:
            values["working_days"] = default_working_days()
        if "start_date" in values or "end_date" in values:
            values["duration"] = timeline_duration(start_date, end_date)
        return values

    # Project-scoped timeline

    async def get_project_timeline(self, project_id: UUID) -> ProjectTimelineResponse:
        await self._require_project(project_id)
        timeline = await self.timeline_repo.get_by_project(project_id)
        if timeline is None:
            return ProjectTimelineResponse(exists=False, message="No timeline has been created for this project")
        return ProjectTimelineResponse(exists=True, timeline=self._to_response(timeline))

    async def create_project_timeline(self, project_id: UUID, timeline_data: TimelineCreate) -> TimelineResponse:
        """Create the project's timeline; a project has at most one."""
        await self._require_project(project_id)
        if await self.timeline_repo.get_by_project(project_id) is not None:
            raise ConflictException("Timeline already exists for this project")

        data = timeline_data.model_dump()
        values = self._timeline_values(data, timeline_data.start_date, timeline_data.end_date)
        timeline = await self.timeline_repo.create(project_id=project_id, **values)
        await self.session.commit()

        logger.info("Timeline created", extra={"timeline_id": str(timeline.id), "project_id": str(project_id)})
        return self._to_response(await self.timeline_repo.get(timeline.id))

    async def update_project_timeline(self, project_id: UUID, timeline_data: TimelineUpdate) -> TimelineResponse:
        await self._require_project(project_id)
        timeline = await self.timeline_repo.get_by_project(project_id)
        if timeline is None:
            raise NotFoundException("Timeline not found for this project")
        return await self._update(timeline, timeline_data)

    async def delete_project_timeline(self, project_id: UUID) -> bool:
        await self._require_project(project_id)
        timeline = await self.timeline_repo.get_by_project(project_id)
        if timeline is None:
            return False
        return await self.delete_timeline(timeline.id)

    # Timeline by id

    async def get_timeline(self, timeline_id: UUID) -> Optional[TimelineResponse]:
        timeline = await self.timeline_repo.get(timeline_id)
        if not timeline:
            return None
        return self._to_response(timeline)

    async def update_timeline(self, timeline_id: UUID, timeline_data: TimelineUpdate) -> Optional[TimelineResponse]:
        timeline = await self.timeline_repo.get(timeline_id)
        if not timeline:
            return None
        return await self._update(timeline, timeline_data)

    async def _update(self, timeline: Timeline, timeline_data: TimelineUpdate) -> TimelineResponse:
        data = timeline_data.model_dump(exclude_unset=True)
        if data.get("start_date") is None:
            data.pop("start_date", None)
        values = self._timeline_values(
            data,
            data.get("start_date", timeline.start_date),
            data.get("end_date", timeline.end_date),
        )
        await self.timeline_repo.update(timeline.id, **values)
        await self.session.commit()
        return self._to_response(await self.timeline_repo.get(timeline.id))

    async def delete_timeline(self, timeline_id: UUID) -> bool:
        """Delete a timeline with its milestones and tasks."""
        if not await self.timeline_repo.exists(timeline_id):
            return False
        deleted = await self.timeline_repo.delete_cascade(timeline_id)
        await self.session.commit()
        logger.info("Timeline deleted", extra={"timeline_id": str(timeline_id)})
        return deleted

    # Milestones

    async def _check_dependency(self, timeline_id: UUID, milestone_id: Optional[UUID], depends_on: Optional[UUID]) -> None:
        if depends_on is None:
            return
        if depends_on == milestone_id:
            raise ValidationException("A milestone cannot depend on itself")
        dependency = await self.milestone_repo.get(depends_on)
        if dependency is None or dependency.timeline_id != timeline_id:
            raise ValidationException(
                "Milestone dependency must be a milestone of the same timeline",
                details={"depends_on": str(depends_on)},
            )

    async def list_milestones(self, timeline_id: UUID) -> List[MilestoneResponse]:
        await self._require_timeline(timeline_id)
        milestones = await self.milestone_repo.list_for_timeline(timeline_id)
        return [MilestoneResponse.model_validate(m) for m in milestones]

    async def create_milestone(self, timeline_id: UUID, milestone_data: MilestoneCreate) -> MilestoneResponse:
        await self._require_timeline(timeline_id)
        await self._check_dependency(timeline_id, None, milestone_data.depends_on)

        milestone = await self.milestone_repo.create(timeline_id=timeline_id, **milestone_data.model_dump())
        await self.session.commit()
        return MilestoneResponse.model_validate(milestone)

    async def update_milestone(
        self,
        timeline_id: UUID,
        milestone_id: UUID,
        milestone_data: MilestoneUpdate,
    ) -> Optional[MilestoneResponse]:
        milestone = await self.milestone_repo.get(milestone_id)
        if milestone is None or milestone.timeline_id != timeline_id:
            return None

        update_dict = milestone_data.model_dump(exclude_unset=True)
        if update_dict.get("due_date", True) is None:
            raise ValidationException("Milestone due date cannot be cleared")
        if "depends_on" in update_dict:
            await self._check_dependency(timeline_id, milestone_id, update_dict["depends_on"])

        updated = await self.milestone_repo.update(milestone_id, **update_dict)
        await self.session.commit()
        return MilestoneResponse.model_validate(updated)

    async def delete_milestone(self, timeline_id: UUID, milestone_id: UUID) -> Optional[MilestoneDeleteResponse]:
        """Delete a milestone and every task attached to it."""
        milestone = await self.milestone_repo.get(milestone_id)
        if milestone is None or milestone.timeline_id != timeline_id:
            return None

        tasks_removed = await self.milestone_repo.delete_cascade(milestone_id)
        await self.session.commit()
        logger.info(
            "Milestone deleted",
            extra={"milestone_id": str(milestone_id), "tasks_removed": tasks_removed},
        )
        return MilestoneDeleteResponse(id=milestone_id, tasks_removed=tasks_removed)

    # Tasks

    async def _check_milestone(self, timeline_id: UUID, milestone_id: Optional[UUID]) -> None:
        if milestone_id is None:
            return
        milestone = await self.milestone_repo.get(milestone_id)
        if milestone is None or milestone.timeline_id != timeline_id:
            raise ValidationException(
                "Task milestone must belong to the same timeline",
                details={"milestone_id": str(milestone_id)},
            )

    @staticmethod
    def _schedule(planned_start: date, duration: int, planned_end: Optional[date]) -> date:
        """Task end date; defaults to start plus duration days."""
        if planned_end is None:
            return planned_start + timedelta(days=duration)
        if planned_end < planned_start:
            raise ValidationException("Task end date must be on or after its start date")
        return planned_end

    async def list_tasks(self, timeline_id: UUID) -> List[TaskResponse]:
        await self._require_timeline(timeline_id)
        tasks = await self.task_repo.list_for_timeline(timeline_id)
        return [TaskResponse.model_validate(t) for t in tasks]

    async def create_task(self, timeline_id: UUID, task_data: TaskCreate) -> TaskResponse:
        await self._require_timeline(timeline_id)
        await self._check_milestone(timeline_id, task_data.milestone_id)

        task_dict = task_data.model_dump()
        task_dict["planned_end"] = self._schedule(task_data.planned_start, task_data.duration, task_data.planned_end)
        task = await self.task_repo.create(timeline_id=timeline_id, **task_dict)
        await self.session.commit()
        return TaskResponse.model_validate(task)

    async def update_task(self, timeline_id: UUID, task_id: UUID, task_data: TaskUpdate) -> Optional[TaskResponse]:
        task = await self.task_repo.get(task_id)
        if task is None or task.timeline_id != timeline_id:
            return None

        update_dict = task_data.model_dump(exclude_unset=True)
        for required in ("name", "planned_start", "duration"):
            if required in update_dict and update_dict[required] is None:
                raise ValidationException(f"Task {required} cannot be cleared")
        if "milestone_id" in update_dict:
            await self._check_milestone(timeline_id, update_dict["milestone_id"])

        if {"planned_start", "duration", "planned_end"} & update_dict.keys():
            # An explicit end wins; otherwise the end follows the new start/duration
            update_dict["planned_end"] = self._schedule(
                update_dict.get("planned_start", task.planned_start),
                update_dict.get("duration", task.duration),
                update_dict.get("planned_end"),
            )

        updated = await self.task_repo.update(task_id, **update_dict)
        await self.session.commit()
        return TaskResponse.model_validate(updated)

    async def delete_task(self, timeline_id: UUID, task_id: UUID) -> bool:
        task = await self.task_repo.get(task_id)
        if task is None or task.timeline_id != timeline_id:
            return False
        deleted = await self.task_repo.delete(task_id)
        await self.session.commit()
        return deleted
