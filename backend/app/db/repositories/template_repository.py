"""
Template repository for database operations.
"""

from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.assembly import Assembly, AssemblyMaterial
from app.models.project import Project
from app.models.template import Template, TemplateAssembly


class TemplateRepository(BaseRepository[Template]):
    """Repository for template operations."""

    search_fields = ("name", "description")
    sortable_fields = ("name", "created_at", "updated_at")

    def __init__(self, session: AsyncSession):
        super().__init__(Template, session)

    def load_options(self):
        return (
            selectinload(Template.assemblies)
            .selectinload(TemplateAssembly.assembly)
            .selectinload(Assembly.materials)
            .selectinload(AssemblyMaterial.material),
            selectinload(Template.projects),
        )

    async def add_assembly(self, template_id: UUID, assembly_id: UUID, quantity: float, sort_order: int) -> TemplateAssembly:
        line = TemplateAssembly(
            template_id=template_id,
            assembly_id=assembly_id,
            quantity=quantity,
            sort_order=sort_order,
        )
        self.session.add(line)
        await self.session.flush()
        return line

    async def clear_assemblies(self, template_id: UUID) -> int:
        """Remove every assembly line of a template."""
        result = await self.session.execute(
            delete(TemplateAssembly)
            .where(TemplateAssembly.template_id == template_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount

    async def count_projects(self, template_id: UUID) -> int:
        """Number of projects created from a template."""
        return await self.count_where(Project.from_template_id, template_id)
