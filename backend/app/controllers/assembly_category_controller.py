"""
Assembly category controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.assembly_category import (
    AssemblyCategoryCreate,
    AssemblyCategoryUpdate,
    AssemblyCategoryResponse,
    AssemblyCategoryListResponse,
)
from app.schemas.common import BulkDeleteResponse
from app.services.assembly_category_service import AssemblyCategoryService
from app.utils.list_view import ListViewState


class AssemblyCategoryController(BaseController):
    """Controller for assembly category operations."""

    def __init__(self, session: AsyncSession):
        self.category_service = AssemblyCategoryService(session)

    async def create_category(self, category_data: AssemblyCategoryCreate) -> AssemblyCategoryResponse:
        return await self.category_service.create_category(category_data)

    async def get_category(self, category_id: UUID) -> Optional[AssemblyCategoryResponse]:
        return await self.category_service.get_category(category_id)

    async def list_categories(self, state: ListViewState) -> AssemblyCategoryListResponse:
        categories, total = await self.category_service.list_categories(state)
        return AssemblyCategoryListResponse(items=categories, total=total, page=state.page, page_size=state.page_size)

    async def update_category(
        self,
        category_id: UUID,
        category_data: AssemblyCategoryUpdate,
    ) -> Optional[AssemblyCategoryResponse]:
        return await self.category_service.update_category(category_id, category_data)

    async def delete_category(self, category_id: UUID) -> bool:
        return await self.category_service.delete_category(category_id)

    async def bulk_delete_categories(self, ids: List[UUID]) -> BulkDeleteResponse:
        return await self.category_service.bulk_delete_categories(ids)
