"""
Assembly group service: group CRUD, item quantity and selection validation.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.core.logging import get_logger
from app.db.repositories.assembly_category_repository import AssemblyCategoryRepository
from app.db.repositories.assembly_group_repository import AssemblyGroupRepository
from app.db.repositories.assembly_repository import AssemblyRepository
from app.models.assembly_group import AssemblyGroup, GroupType
from app.schemas.assembly_group import (
    AssemblyGroupCreate,
    AssemblyGroupUpdate,
    AssemblyGroupResponse,
    AssemblyGroupDeleteResponse,
    AssemblyGroupItemInput,
    SelectionValidationRequest,
    SelectionValidationResult,
)
from app.services.base_service import BaseService
from app.services.selection_rules import default_selection, validate_selections

logger = get_logger(__name__)


class AssemblyGroupService(BaseService):
    """Service for assembly group operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.group_repo = AssemblyGroupRepository(session)
        self.assembly_repo = AssemblyRepository(session)
        self.category_repo = AssemblyCategoryRepository(session)

    def _to_response(self, group: AssemblyGroup) -> AssemblyGroupResponse:
        response = AssemblyGroupResponse.model_validate(group)
        response.category_name = group.category.name if group.category else None
        response.default_selection = default_selection(group)
        return response

    async def _check_items(
        self,
        category_id: UUID,
        group_type: GroupType,
        items: List[AssemblyGroupItemInput],
    ) -> None:
        """Structural checks on a group's item set."""
        assembly_ids = [item.assembly_id for item in items]
        if len(set(assembly_ids)) != len(assembly_ids):
            raise ValidationException("An assembly can appear only once in a group")

        assemblies = {a.id: a for a in await self.assembly_repo.list_by_ids(assembly_ids)}
        for assembly_id in assembly_ids:
            assembly = assemblies.get(assembly_id)
            if assembly is None:
                raise ValidationException("Assembly not found", details={"assembly_id": str(assembly_id)})
            if assembly.category_id != category_id:
                raise ValidationException(
                    "Assembly does not belong to the group's category",
                    f"'{assembly.name}' belongs to another category",
                    {"assembly_id": str(assembly_id)},
                )

        if group_type == GroupType.CHOOSE_ONE and sum(1 for item in items if item.is_default) > 1:
            raise ValidationException("A choose-one group can have at most one default item")

        members = set(assembly_ids)
        for item in items:
            for other in item.conflicts_with:
                if other == item.assembly_id or other not in members:
                    raise ValidationException(
                        "Conflicts must reference other assemblies of the same group",
                        details={"assembly_id": str(item.assembly_id), "conflicts_with": str(other)},
                    )

    async def _add_items(self, group_id: UUID, items: List[AssemblyGroupItemInput]) -> None:
        for index, item in enumerate(items):
            await self.group_repo.add_item(
                group_id,
                assembly_id=item.assembly_id,
                quantity=item.quantity,
                conflicts_with=[str(x) for x in item.conflicts_with],
                is_default=item.is_default,
                sort_order=item.sort_order if "sort_order" in item.model_fields_set else index,
            )

    async def create_group(self, group_data: AssemblyGroupCreate) -> AssemblyGroupResponse:
        """Create a group with its items."""
        if not await self.category_repo.exists(group_data.category_id):
            raise NotFoundException("Assembly category not found", details={"category_id": str(group_data.category_id)})
        await self._check_items(group_data.category_id, group_data.group_type, group_data.items)

        group = await self.group_repo.create(**group_data.model_dump(exclude_unset=True, exclude={"items"}))
        await self._add_items(group.id, group_data.items)
        await self.session.commit()

        logger.info(
            "Assembly group created",
            extra={"group_id": str(group.id), "group_type": group.group_type.value, "items": len(group_data.items)},
        )
        group = await self.group_repo.get(group.id)
        return self._to_response(group)

    async def get_group(self, group_id: UUID) -> Optional[AssemblyGroupResponse]:
        group = await self.group_repo.get(group_id)
        if not group:
            return None
        return self._to_response(group)

    async def list_groups(self, category_id: Optional[UUID] = None) -> Tuple[List[AssemblyGroupResponse], int]:
        """Groups ordered by category then sort order."""
        groups = await self.group_repo.list_for_category(category_id)
        return [self._to_response(g) for g in groups], len(groups)

    async def update_group(self, group_id: UUID, group_data: AssemblyGroupUpdate) -> Optional[AssemblyGroupResponse]:
        """Update a group; a provided items list replaces the item set."""
        group = await self.group_repo.get(group_id)
        if not group:
            return None

        update_dict = group_data.model_dump(exclude_unset=True, exclude={"items"})
        group_type = update_dict.get("group_type") or group.group_type
        items = group_data.items if "items" in group_data.model_fields_set else None
        if items is not None:
            await self._check_items(group.category_id, group_type, items)
        elif group_type == GroupType.CHOOSE_ONE and sum(1 for item in group.items if item.is_default) > 1:
            raise ValidationException("A choose-one group can have at most one default item")

        await self.group_repo.update(group_id, **update_dict)
        if items is not None:
            await self.group_repo.clear_items(group_id)
            await self._add_items(group_id, items)
        await self.session.commit()

        updated = await self.group_repo.get(group_id)
        return self._to_response(updated)

    async def delete_group(self, group_id: UUID) -> Optional[AssemblyGroupDeleteResponse]:
        """Delete a group's items, then the group."""
        if not await self.group_repo.exists(group_id):
            return None

        items_removed = await self.group_repo.clear_items(group_id)
        await self.group_repo.delete(group_id)
        await self.session.commit()
        logger.info("Assembly group deleted", extra={"group_id": str(group_id), "items_removed": items_removed})
        return AssemblyGroupDeleteResponse(id=group_id, items_removed=items_removed)

    async def set_item_quantity(self, group_id: UUID, assembly_id: UUID, quantity: int) -> AssemblyGroupResponse:
        """Set one item's quantity; last write wins."""
        if quantity < 1:
            raise ValidationException("Quantity must be at least 1", details={"quantity": quantity})
        if not await self.group_repo.exists(group_id):
            raise NotFoundException("Assembly group not found")

        updated = await self.group_repo.set_item_quantity(group_id, assembly_id, quantity)
        if not updated:
            raise NotFoundException(
                "Assembly is not an item of this group",
                details={"group_id": str(group_id), "assembly_id": str(assembly_id)},
            )
        await self.session.commit()

        group = await self.group_repo.get(group_id)
        return self._to_response(group)

    async def validate_selection(self, request: SelectionValidationRequest) -> SelectionValidationResult:
        """Validate and price chosen assemblies across categories and groups."""
        group_ids = list({gid for by_group in request.selections.values() for gid in by_group})
        groups = {g.id: g for g in await self.group_repo.list_by_ids(group_ids)}
        result = validate_selections(groups, request.selections)
        logger.info(
            "Selection validated",
            extra={"groups": len(group_ids), "errors": len(result.errors), "total_cost": result.total_cost},
        )
        return result
