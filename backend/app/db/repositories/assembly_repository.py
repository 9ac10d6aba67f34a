"""
Assembly repository for database operations.
"""

from typing import List
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.assembly import Assembly, AssemblyMaterial
from app.models.assembly_group import AssemblyGroupItem
from app.models.template import TemplateAssembly


class AssemblyRepository(BaseRepository[Assembly]):
    """Repository for assembly operations."""

    search_fields = ("name", "description", "part_number", "manufacturer")
    sortable_fields = ("name", "part_number", "manufacturer", "price", "module", "created_at", "updated_at")

    def __init__(self, session: AsyncSession):
        super().__init__(Assembly, session)

    def load_options(self):
        return (
            selectinload(Assembly.category),
            selectinload(Assembly.materials).selectinload(AssemblyMaterial.material),
        )

    async def list_by_ids(self, ids: List[UUID]) -> List[Assembly]:
        """Fetch assemblies by id with their materials, in no particular order."""
        if not ids:
            return []
        result = await self.session.execute(
            select(Assembly).options(*self.load_options()).where(Assembly.id.in_(ids))
        )
        return list(result.scalars().unique().all())

    async def add_material(self, assembly_id: UUID, material_id: UUID, quantity: float) -> AssemblyMaterial:
        link = AssemblyMaterial(assembly_id=assembly_id, material_id=material_id, quantity=quantity)
        self.session.add(link)
        await self.session.flush()
        return link

    async def clear_materials(self, assembly_id: UUID) -> int:
        """Remove the whole bill of materials of an assembly."""
        result = await self.session.execute(
            delete(AssemblyMaterial)
            .where(AssemblyMaterial.assembly_id == assembly_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount

    async def count_group_usages(self, assembly_id: UUID) -> int:
        """Number of assembly group items referencing an assembly."""
        return await self.count_where(AssemblyGroupItem.assembly_id, assembly_id)

    async def count_template_usages(self, assembly_id: UUID) -> int:
        """Number of template lines referencing an assembly."""
        return await self.count_where(TemplateAssembly.assembly_id, assembly_id)
