"""
Assembly category repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.assembly import Assembly
from app.models.assembly_category import AssemblyCategory
from app.models.assembly_group import AssemblyGroup


class AssemblyCategoryRepository(BaseRepository[AssemblyCategory]):
    """Repository for assembly category operations."""

    search_fields = ("name", "description")

    def __init__(self, session: AsyncSession):
        super().__init__(AssemblyCategory, session)

    def load_options(self):
        return (selectinload(AssemblyCategory.assemblies),)

    async def count_assemblies(self, category_id) -> int:
        return await self.count_where(Assembly.category_id, category_id)

    async def count_groups(self, category_id) -> int:
        return await self.count_where(AssemblyGroup.category_id, category_id)
