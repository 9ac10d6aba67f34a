"""
Project API endpoints, including the project's timeline.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.project_controller import ProjectController
from app.controllers.template_controller import TemplateController
from app.controllers.timeline_controller import TimelineController
from app.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectListResponse,
)
from app.schemas.template import BoqResponse
from app.schemas.timeline import (
    TimelineCreate,
    TimelineUpdate,
    TimelineResponse,
    ProjectTimelineResponse,
)
from app.utils.list_view import ListViewState, list_view_params

router = APIRouter()


def project_list_view(
    state: ListViewState = Depends(list_view_params),
    status: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    client_id: Optional[UUID] = Query(None),
) -> ListViewState:
    return state.with_filters(status=status, priority=priority, client_id=client_id)


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Create a new project."""
    controller = ProjectController(db)
    return await controller.create_project(project_data)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    state: ListViewState = Depends(project_list_view),
    db: AsyncSession = Depends(get_db),
) -> ProjectListResponse:
    """List projects with search, filters, sort and pagination."""
    controller = ProjectController(db)
    return await controller.list_projects(state)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Get project by ID."""
    controller = ProjectController(db)
    project = await controller.get_project(project_id)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return project


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    project_data: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
) -> ProjectResponse:
    """Update a project."""
    controller = ProjectController(db)
    project = await controller.update_project(project_id, project_data)
    if not project:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a project and its timeline."""
    controller = ProjectController(db)
    deleted = await controller.delete_project(project_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )


@router.get("/{project_id}/boq", response_model=BoqResponse)
async def get_project_boq(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> BoqResponse:
    """Bill of quantities of the template the project was created from."""
    controller = TemplateController(db)
    boq = await controller.project_boq(project_id)
    if boq is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found",
        )
    return boq


@router.get("/{project_id}/timeline", response_model=ProjectTimelineResponse)
async def get_project_timeline(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ProjectTimelineResponse:
    """Get the project's timeline, reporting whether one exists."""
    controller = TimelineController(db)
    return await controller.get_project_timeline(project_id)


@router.post("/{project_id}/timeline", response_model=TimelineResponse, status_code=status.HTTP_201_CREATED)
async def create_project_timeline(
    project_id: UUID,
    timeline_data: TimelineCreate,
    db: AsyncSession = Depends(get_db),
) -> TimelineResponse:
    """Create the project's timeline."""
    controller = TimelineController(db)
    return await controller.create_project_timeline(project_id, timeline_data)


@router.put("/{project_id}/timeline", response_model=TimelineResponse)
async def update_project_timeline(
    project_id: UUID,
    timeline_data: TimelineUpdate,
    db: AsyncSession = Depends(get_db),
) -> TimelineResponse:
    """Update the project's timeline."""
    controller = TimelineController(db)
    return await controller.update_project_timeline(project_id, timeline_data)


@router.delete("/{project_id}/timeline", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project_timeline(
    project_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete the project's timeline with its milestones and tasks."""
    controller = TimelineController(db)
    deleted = await controller.delete_project_timeline(project_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Timeline not found",
        )
