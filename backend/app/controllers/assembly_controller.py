"""
Assembly controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.assembly import AssemblyCreate, AssemblyUpdate, AssemblyResponse, AssemblyListResponse
from app.schemas.common import BulkDeleteResponse
from app.services.assembly_service import AssemblyService
from app.utils.list_view import ListViewState


class AssemblyController(BaseController):
    """Controller for assembly operations."""

    def __init__(self, session: AsyncSession):
        self.assembly_service = AssemblyService(session)

    async def create_assembly(self, assembly_data: AssemblyCreate) -> AssemblyResponse:
        return await self.assembly_service.create_assembly(assembly_data)

    async def get_assembly(self, assembly_id: UUID) -> Optional[AssemblyResponse]:
        return await self.assembly_service.get_assembly(assembly_id)

    async def list_assemblies(self, state: ListViewState) -> AssemblyListResponse:
        assemblies, total = await self.assembly_service.list_assemblies(state)
        return AssemblyListResponse(items=assemblies, total=total, page=state.page, page_size=state.page_size)

    async def update_assembly(self, assembly_id: UUID, assembly_data: AssemblyUpdate) -> Optional[AssemblyResponse]:
        return await self.assembly_service.update_assembly(assembly_id, assembly_data)

    async def delete_assembly(self, assembly_id: UUID) -> bool:
        return await self.assembly_service.delete_assembly(assembly_id)

    async def bulk_delete_assemblies(self, ids: List[UUID]) -> BulkDeleteResponse:
        return await self.assembly_service.bulk_delete_assemblies(ids)
