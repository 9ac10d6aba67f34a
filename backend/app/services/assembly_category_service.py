"""
Assembly category service with business logic.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException
from app.db.repositories.assembly_category_repository import AssemblyCategoryRepository
from app.models.assembly_category import AssemblyCategory
from app.schemas.assembly_category import (
    AssemblyCategoryCreate,
    AssemblyCategoryUpdate,
    AssemblyCategoryResponse,
)
from app.services.base_service import BaseService
from app.utils.list_view import ListViewState


class AssemblyCategoryService(BaseService):
    """Service for assembly category operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.category_repo = AssemblyCategoryRepository(session)

    def _to_response(self, category: AssemblyCategory) -> AssemblyCategoryResponse:
        response = AssemblyCategoryResponse.model_validate(category)
        response.assembly_count = len(category.assemblies)
        return response

    async def _ensure_name_free(self, name: str, current_id: Optional[UUID] = None) -> None:
        existing = await self.category_repo.get_by(name=name)
        if existing is not None and existing.id != current_id:
            raise ConflictException("Category name already exists", f"A category named '{name}' already exists")

    async def create_category(self, category_data: AssemblyCategoryCreate) -> AssemblyCategoryResponse:
        await self._ensure_name_free(category_data.name)
        category = await self.category_repo.create(**category_data.model_dump(exclude_unset=True))
        await self.session.commit()
        category = await self.category_repo.get(category.id)
        return self._to_response(category)

    async def get_category(self, category_id: UUID) -> Optional[AssemblyCategoryResponse]:
        category = await self.category_repo.get(category_id)
        if not category:
            return None
        return self._to_response(category)

    async def list_categories(self, state: ListViewState) -> Tuple[List[AssemblyCategoryResponse], int]:
        categories, total = await self.category_repo.list_view(state)
        return [self._to_response(c) for c in categories], total

    async def update_category(
        self,
        category_id: UUID,
        category_data: AssemblyCategoryUpdate,
    ) -> Optional[AssemblyCategoryResponse]:
        if not await self.category_repo.exists(category_id):
            return None

        update_dict = category_data.model_dump(exclude_unset=True)
        if update_dict.get("name"):
            await self._ensure_name_free(update_dict["name"], category_id)
        updated = await self.category_repo.update(category_id, **update_dict)
        await self.session.commit()
        return self._to_response(updated)

    async def delete_category(self, category_id: UUID) -> bool:
        """Delete a category that owns no assemblies and no groups."""
        if not await self.category_repo.exists(category_id):
            return False

        assemblies = await self.category_repo.count_assemblies(category_id)
        groups = await self.category_repo.count_groups(category_id)
        if assemblies or groups:
            raise ConflictException(
                "Category is in use",
                f"Category owns {assemblies} assembly(ies) and {groups} group(s)",
                {"assemblies": assemblies, "groups": groups},
            )

        deleted = await self.category_repo.delete(category_id)
        await self.session.commit()
        return deleted

    async def bulk_delete_categories(self, ids: List[UUID]):
        return await self.bulk_delete(ids, self.delete_category)
