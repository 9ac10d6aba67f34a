"""
Template controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.assembly_group import SelectionValidationResult
from app.schemas.common import BulkDeleteResponse
from app.schemas.template import (
    BoqResponse,
    TemplateCreate,
    TemplateListResponse,
    TemplateResponse,
    TemplateUpdate,
)
from app.services.template_service import TemplateService
from app.utils.list_view import ListViewState


class TemplateController(BaseController):
    """Controller for template operations."""

    def __init__(self, session: AsyncSession):
        self.template_service = TemplateService(session)

    async def create_template(self, template_data: TemplateCreate) -> TemplateResponse:
        return await self.template_service.create_template(template_data)

    async def get_template(self, template_id: UUID) -> Optional[TemplateResponse]:
        return await self.template_service.get_template(template_id)

    async def list_templates(self, state: ListViewState) -> TemplateListResponse:
        templates, total = await self.template_service.list_templates(state)
        return TemplateListResponse(items=templates, total=total, page=state.page, page_size=state.page_size)

    async def update_template(self, template_id: UUID, template_data: TemplateUpdate) -> Optional[TemplateResponse]:
        return await self.template_service.update_template(template_id, template_data)

    async def delete_template(self, template_id: UUID) -> bool:
        return await self.template_service.delete_template(template_id)

    async def bulk_delete_templates(self, ids: List[UUID]) -> BulkDeleteResponse:
        return await self.template_service.bulk_delete_templates(ids)

    async def get_boq(self, template_id: UUID) -> Optional[BoqResponse]:
        return await self.template_service.get_boq(template_id)

    async def validate_selection(self, template_id: UUID) -> Optional[SelectionValidationResult]:
        return await self.template_service.validate_stored_selection(template_id)

    async def project_boq(self, project_id: UUID) -> Optional[BoqResponse]:
        return await self.template_service.project_boq(project_id)
