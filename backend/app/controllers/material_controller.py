"""
Material controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.common import BulkDeleteResponse
from app.schemas.material import MaterialCreate, MaterialUpdate, MaterialResponse, MaterialListResponse
from app.services.material_service import MaterialService
from app.utils.list_view import ListViewState


class MaterialController(BaseController):
    """Controller for material operations."""

    def __init__(self, session: AsyncSession):
        self.material_service = MaterialService(session)

    async def create_material(self, material_data: MaterialCreate) -> MaterialResponse:
        return await self.material_service.create_material(material_data)

    async def get_material(self, material_id: UUID) -> Optional[MaterialResponse]:
        return await self.material_service.get_material(material_id)

    async def list_materials(self, state: ListViewState) -> MaterialListResponse:
        materials, total = await self.material_service.list_materials(state)
        return MaterialListResponse(items=materials, total=total, page=state.page, page_size=state.page_size)

    async def update_material(self, material_id: UUID, material_data: MaterialUpdate) -> Optional[MaterialResponse]:
        return await self.material_service.update_material(material_id, material_data)

    async def delete_material(self, material_id: UUID) -> bool:
        return await self.material_service.delete_material(material_id)

    async def bulk_delete_materials(self, ids: List[UUID]) -> BulkDeleteResponse:
        return await self.material_service.bulk_delete_materials(ids)
