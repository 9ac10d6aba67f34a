"""
Assembly group repository for database operations.
"""

from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.assembly import Assembly, AssemblyMaterial
from app.models.assembly_group import AssemblyGroup, AssemblyGroupItem


class AssemblyGroupRepository(BaseRepository[AssemblyGroup]):
    """Repository for assembly group operations."""

    search_fields = ("name", "description")
    sortable_fields = ("sort_order", "name", "group_type", "created_at", "updated_at")

    def __init__(self, session: AsyncSession):
        super().__init__(AssemblyGroup, session)

    def load_options(self):
        return (
            selectinload(AssemblyGroup.category),
            selectinload(AssemblyGroup.items)
            .selectinload(AssemblyGroupItem.assembly)
            .selectinload(Assembly.materials)
            .selectinload(AssemblyMaterial.material),
        )

    async def list_for_category(self, category_id: Optional[UUID] = None) -> List[AssemblyGroup]:
        """Groups ordered by category then sort order, items loaded."""
        query = (
            select(AssemblyGroup)
            .options(*self.load_options())
            .order_by(AssemblyGroup.category_id, AssemblyGroup.sort_order, AssemblyGroup.name)
            .execution_options(populate_existing=True)
        )
        if category_id is not None:
            query = query.where(AssemblyGroup.category_id == category_id)
        result = await self.session.execute(query)
        return list(result.scalars().unique().all())

    async def list_by_ids(self, ids: List[UUID]) -> List[AssemblyGroup]:
        if not ids:
            return []
        result = await self.session.execute(
            select(AssemblyGroup)
            .options(*self.load_options())
            .where(AssemblyGroup.id.in_(ids))
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().unique().all())

    async def add_item(self, group_id: UUID, **kwargs) -> AssemblyGroupItem:
        item = AssemblyGroupItem(group_id=group_id, **kwargs)
        self.session.add(item)
        await self.session.flush()
        return item

    async def clear_items(self, group_id: UUID) -> int:
        """Delete every item of a group; returns the number removed."""
        result = await self.session.execute(
            delete(AssemblyGroupItem)
            .where(AssemblyGroupItem.group_id == group_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount

    async def set_item_quantity(self, group_id: UUID, assembly_id: UUID, quantity: int) -> bool:
        """Set an item's quantity; False when the assembly is not in the group."""
        result = await self.session.execute(
            update(AssemblyGroupItem)
            .where(
                AssemblyGroupItem.group_id == group_id,
                AssemblyGroupItem.assembly_id == assembly_id,
            )
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return result.rowcount > 0
