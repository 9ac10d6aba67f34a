"""
Project service with business logic.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.core.logging import get_logger
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.project_repository import ProjectRepository
from app.db.repositories.template_repository import TemplateRepository
from app.db.repositories.timeline_repository import TimelineRepository
from app.db.repositories.user_repository import UserRepository
from app.models.project import Project, ProjectStatus
from app.models.timeline import Priority
from app.schemas.project import ProjectCreate, ProjectUpdate, ProjectResponse
from app.services.base_service import BaseService
from app.services.boq_calculator import template_cost
from app.utils.list_view import ListViewState, parse_enum_filters

logger = get_logger(__name__)

FILTER_ENUMS = {"status": ProjectStatus, "priority": Priority}


class ProjectService(BaseService):
    """Service for project operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.project_repo = ProjectRepository(session)
        self.client_repo = ClientRepository(session)
        self.user_repo = UserRepository(session)
        self.timeline_repo = TimelineRepository(session)
        self.template_repo = TemplateRepository(session)

    def _to_response(self, project: Project) -> ProjectResponse:
        response = ProjectResponse.model_validate(project)
        response.client_name = (
            (project.client.company_name or project.client.contact_person) if project.client else None
        )
        response.creator_name = project.creator.name if project.creator else None
        response.template_name = project.template.name if project.template else None
        response.has_timeline = project.timeline is not None
        return response

    async def _check_references(self, data: dict) -> None:
        if data.get("client_id") and not await self.client_repo.exists(data["client_id"]):
            raise NotFoundException("Client not found", details={"client_id": str(data["client_id"])})
        if data.get("created_by") and not await self.user_repo.exists(data["created_by"]):
            raise NotFoundException("User not found", details={"created_by": str(data["created_by"])})
        if data.get("from_template_id") and not await self.template_repo.exists(data["from_template_id"]):
            raise NotFoundException("Template not found", details={"from_template_id": str(data["from_template_id"])})

    @staticmethod
    def _check_dates(start_date, end_date) -> None:
        if start_date and end_date and end_date < start_date:
            raise ValidationException("End date must be on or after start date")

    async def create_project(self, project_data: ProjectCreate) -> ProjectResponse:
        project_dict = project_data.model_dump(exclude_unset=True)
        await self._check_references(project_dict)
        self._check_dates(project_data.start_date, project_data.end_date)
        if project_data.from_template_id and "total_price" not in project_data.model_fields_set:
            # Priced from the template when no explicit price is given
            template = await self.template_repo.get(project_data.from_template_id)
            project_dict["total_price"] = template_cost(template.assemblies)

        project = await self.project_repo.create(**project_dict)
        await self.session.commit()
        logger.info("Project created", extra={"project_id": str(project.id)})
        project = await self.project_repo.get(project.id)
        return self._to_response(project)

    async def get_project(self, project_id: UUID) -> Optional[ProjectResponse]:
        project = await self.project_repo.get(project_id)
        if not project:
            return None
        return self._to_response(project)

    async def list_projects(self, state: ListViewState) -> Tuple[List[ProjectResponse], int]:
        """List projects; status and priority filters accept enum values, client_id a UUID."""
        projects, total = await self.project_repo.list_view(parse_enum_filters(state, FILTER_ENUMS))
        return [self._to_response(p) for p in projects], total

    async def update_project(self, project_id: UUID, project_data: ProjectUpdate) -> Optional[ProjectResponse]:
        project = await self.project_repo.get(project_id)
        if not project:
            return None

        update_dict = project_data.model_dump(exclude_unset=True)
        await self._check_references(update_dict)
        self._check_dates(
            update_dict.get("start_date", project.start_date),
            update_dict.get("end_date", project.end_date),
        )
        updated = await self.project_repo.update(project_id, **update_dict)
        await self.session.commit()
        return self._to_response(updated)

    async def delete_project(self, project_id: UUID) -> bool:
        """Delete a project together with its timeline."""
        if not await self.project_repo.exists(project_id):
            return False

        timeline = await self.timeline_repo.get_by_project(project_id)
        if timeline is not None:
            await self.timeline_repo.delete_cascade(timeline.id)
        deleted = await self.project_repo.delete(project_id)
        await self.session.commit()
        return deleted
