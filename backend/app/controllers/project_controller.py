"""
Project controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse, ProjectListResponse
from app.services.project_service import ProjectService
from app.utils.list_view import ListViewState


class ProjectController(BaseController):
    """Controller for project operations."""

    def __init__(self, session: AsyncSession):
        self.project_service = ProjectService(session)

    async def create_project(self, project_data: ProjectCreate) -> ProjectResponse:
        return await self.project_service.create_project(project_data)

    async def get_project(self, project_id: UUID) -> Optional[ProjectResponse]:
        return await self.project_service.get_project(project_id)

    async def list_projects(self, state: ListViewState) -> ProjectListResponse:
        projects, total = await self.project_service.list_projects(state)
        return ProjectListResponse(items=projects, total=total, page=state.page, page_size=state.page_size)

    async def update_project(self, project_id: UUID, project_data: ProjectUpdate) -> Optional[ProjectResponse]:
        return await self.project_service.update_project(project_id, project_data)

    async def delete_project(self, project_id: UUID) -> bool:
        return await self.project_service.delete_project(project_id)
