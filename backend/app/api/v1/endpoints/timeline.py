"""
Timeline API endpoints: timelines by id, their milestones and their tasks.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.timeline_controller import TimelineController
from app.schemas.timeline import (
    TimelineUpdate,
    TimelineResponse,
    MilestoneCreate,
    MilestoneUpdate,
    MilestoneResponse,
    MilestoneDeleteResponse,
    TaskCreate,
    TaskUpdate,
    TaskResponse,
)

router = APIRouter()


@router.get("/{timeline_id}", response_model=TimelineResponse)
async def get_timeline(
    timeline_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> TimelineResponse:
    """Get timeline by ID with milestones and tasks."""
    controller = TimelineController(db)
    timeline = await controller.get_timeline(timeline_id)
    if not timeline:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timeline not found",
        )
    return timeline


@router.put("/{timeline_id}", response_model=TimelineResponse)
async def update_timeline(
    timeline_id: UUID,
    timeline_data: TimelineUpdate,
    db: AsyncSession = Depends(get_db),
) -> TimelineResponse:
    """Update a timeline."""
    controller = TimelineController(db)
    timeline = await controller.update_timeline(timeline_id, timeline_data)
    if not timeline:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timeline not found",
        )
    return timeline


@router.delete("/{timeline_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_timeline(
    timeline_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a timeline with its milestones and tasks."""
    controller = TimelineController(db)
    deleted = await controller.delete_timeline(timeline_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timeline not found",
        )


@router.get("/{timeline_id}/milestones", response_model=List[MilestoneResponse])
async def list_milestones(
    timeline_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> List[MilestoneResponse]:
    """List a timeline's milestones by due date."""
    controller = TimelineController(db)
    return await controller.list_milestones(timeline_id)


@router.post("/{timeline_id}/milestones", response_model=MilestoneResponse, status_code=status.HTTP_201_CREATED)
async def create_milestone(
    timeline_id: UUID,
    milestone_data: MilestoneCreate,
    db: AsyncSession = Depends(get_db),
) -> MilestoneResponse:
    """Add a milestone to a timeline."""
    controller = TimelineController(db)
    return await controller.create_milestone(timeline_id, milestone_data)


@router.put("/{timeline_id}/milestones/{milestone_id}", response_model=MilestoneResponse)
async def update_milestone(
    timeline_id: UUID,
    milestone_id: UUID,
    milestone_data: MilestoneUpdate,
    db: AsyncSession = Depends(get_db),
) -> MilestoneResponse:
    """Update a milestone."""
    controller = TimelineController(db)
    milestone = await controller.update_milestone(timeline_id, milestone_id, milestone_data)
    if not milestone:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Milestone not found",
        )
    return milestone


@router.delete("/{timeline_id}/milestones/{milestone_id}", response_model=MilestoneDeleteResponse)
async def delete_milestone(
    timeline_id: UUID,
    milestone_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> MilestoneDeleteResponse:
    """Delete a milestone and its tasks."""
    controller = TimelineController(db)
    result = await controller.delete_milestone(timeline_id, milestone_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Milestone not found",
        )
    return result


@router.get("/{timeline_id}/tasks", response_model=List[TaskResponse])
async def list_tasks(
    timeline_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> List[TaskResponse]:
    """List a timeline's tasks by planned start."""
    controller = TimelineController(db)
    return await controller.list_tasks(timeline_id)


@router.post("/{timeline_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
async def create_task(
    timeline_id: UUID,
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    """Add a task to a timeline."""
    controller = TimelineController(db)
    return await controller.create_task(timeline_id, task_data)


@router.put("/{timeline_id}/tasks/{task_id}", response_model=TaskResponse)
async def update_task(
    timeline_id: UUID,
    task_id: UUID,
    task_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
) -> TaskResponse:
    """Update a task."""
    controller = TimelineController(db)
    task = await controller.update_task(timeline_id, task_id, task_data)
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )
    return task


@router.delete("/{timeline_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    timeline_id: UUID,
    task_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a task."""
    controller = TimelineController(db)
    deleted = await controller.delete_task(timeline_id, task_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found",
        )
