"""
Assembly group controller.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.assembly_group import (
    AssemblyGroupCreate,
    AssemblyGroupUpdate,
    AssemblyGroupResponse,
    AssemblyGroupListResponse,
    AssemblyGroupDeleteResponse,
    SelectionValidationRequest,
    SelectionValidationResult,
)
from app.services.assembly_group_service import AssemblyGroupService


class AssemblyGroupController(BaseController):
    """Controller for assembly group operations."""

    def __init__(self, session: AsyncSession):
        self.group_service = AssemblyGroupService(session)

    async def create_group(self, group_data: AssemblyGroupCreate) -> AssemblyGroupResponse:
        return await self.group_service.create_group(group_data)

    async def get_group(self, group_id: UUID) -> Optional[AssemblyGroupResponse]:
        return await self.group_service.get_group(group_id)

    async def list_groups(self, category_id: Optional[UUID] = None) -> AssemblyGroupListResponse:
        groups, total = await self.group_service.list_groups(category_id)
        return AssemblyGroupListResponse(items=groups, total=total)

    async def update_group(self, group_id: UUID, group_data: AssemblyGroupUpdate) -> Optional[AssemblyGroupResponse]:
        return await self.group_service.update_group(group_id, group_data)

    async def delete_group(self, group_id: UUID) -> Optional[AssemblyGroupDeleteResponse]:
        return await self.group_service.delete_group(group_id)

    async def set_item_quantity(self, group_id: UUID, assembly_id: UUID, quantity: int) -> AssemblyGroupResponse:
        return await self.group_service.set_item_quantity(group_id, assembly_id, quantity)

    async def validate_selection(self, request: SelectionValidationRequest) -> SelectionValidationResult:
        return await self.group_service.validate_selection(request)
