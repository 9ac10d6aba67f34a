"""
Material repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base_repository import BaseRepository
from app.models.assembly import AssemblyMaterial
from app.models.material import Material


class MaterialRepository(BaseRepository[Material]):
    """Repository for material operations."""

    search_fields = ("name", "part_number", "manufacturer")
    sortable_fields = ("name", "part_number", "manufacturer", "unit", "price", "created_at", "updated_at")

    def __init__(self, session: AsyncSession):
        super().__init__(Material, session)

    async def count_assembly_usages(self, material_id) -> int:
        """Number of assembly bill-of-materials rows referencing a material."""
        return await self.count_where(AssemblyMaterial.material_id, material_id)
