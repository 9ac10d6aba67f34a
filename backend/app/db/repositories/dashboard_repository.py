"""
Dashboard repository: read-only aggregates across the catalog, projects and users.
"""

from datetime import datetime
from typing import Dict, List, Tuple

from sqlalchemy import case, desc, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.assembly import Assembly, AssemblyMaterial
from app.models.material import Material
from app.models.project import Project
from app.models.template import Template, TemplateAssembly
from app.models.user import User, UserStatus


class DashboardRepository:
    """Aggregate queries for dashboard analytics."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _scalar(self, query):
        result = await self.session.execute(query)
        return result.scalar_one()

    async def count(self, model) -> int:
        return await self._scalar(select(func.count()).select_from(model))

    async def material_totals(self) -> Dict[str, float]:
        """Count, value, priced count and distinct manufacturers/units of materials."""
        result = await self.session.execute(
            select(
                func.count(Material.id),
                func.coalesce(func.sum(Material.price), 0),
                func.coalesce(func.sum(case((Material.price > 0, 1), else_=0)), 0),
                func.count(distinct(Material.manufacturer)),
                func.count(distinct(Material.unit)),
            )
        )
        total, value, priced, manufacturers, units = result.one()
        return {
            "total": total,
            "total_value": float(value),
            "with_prices": int(priced),
            "manufacturers_count": manufacturers,
            "unit_types_count": units,
        }

    async def top_expensive_materials(self, limit: int) -> List[Tuple[str, float]]:
        result = await self.session.execute(
            select(Material.name, Material.price)
            .where(Material.price > 0)
            .order_by(Material.price.desc(), Material.name)
            .limit(limit)
        )
        return [(name, float(price)) for name, price in result.all()]

    async def material_created_at(self) -> List[datetime]:
        result = await self.session.execute(select(Material.created_at))
        return list(result.scalars().all())

    async def assembly_material_totals(self) -> Tuple[int, float]:
        """(number of assembly material lines, sum of price x quantity over them)"""
        result = await self.session.execute(
            select(
                func.count(AssemblyMaterial.id),
                func.coalesce(func.sum(Material.price * AssemblyMaterial.quantity), 0),
            ).join(Material, AssemblyMaterial.material_id == Material.id)
        )
        lines, value = result.one()
        return lines, float(value)

    async def top_used_assemblies(self, limit: int) -> List[Tuple[str, int]]:
        """Assemblies by number of template lines, most used first."""
        usages = func.count(TemplateAssembly.id).label("usages")
        result = await self.session.execute(
            select(Assembly.name, usages)
            .join(TemplateAssembly, TemplateAssembly.assembly_id == Assembly.id)
            .group_by(Assembly.id, Assembly.name)
            .order_by(desc("usages"), Assembly.name)
            .limit(limit)
        )
        return [(name, count) for name, count in result.all()]

    async def most_popular_templates(self, limit: int) -> List[Tuple[str, int]]:
        """Templates by number of projects created from them."""
        projects = func.count(Project.id).label("projects")
        result = await self.session.execute(
            select(Template.name, projects)
            .join(Project, Project.from_template_id == Template.id)
            .group_by(Template.id, Template.name)
            .order_by(desc("projects"), Template.name)
            .limit(limit)
        )
        return [(name, count) for name, count in result.all()]

    async def projects(self) -> List[Project]:
        """Every project, newest first."""
        result = await self.session.execute(
            select(Project).order_by(Project.created_at.desc(), Project.id)
        )
        return list(result.scalars().all())

    async def users_by_role(self) -> Dict[str, int]:
        result = await self.session.execute(
            select(User.role, func.count(User.id)).group_by(User.role)
        )
        return {role.value: count for role, count in result.all()}

    async def active_users(self) -> int:
        return await self._scalar(
            select(func.count(User.id)).where(User.status == UserStatus.ACTIVE)
        )
