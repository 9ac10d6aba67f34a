"""
Selection rules for assembly groups.

Pure functions over loaded groups: they check a chosen set of assemblies
against a group's type and price the choice. Nothing here touches the
database; callers pass groups with items, assemblies and materials loaded.
"""

from itertools import combinations
from typing import Dict, List, Mapping, Sequence, Tuple
from uuid import UUID

from app.models.assembly_group import GroupType
from app.schemas.assembly_group import (
    AssemblyCost,
    CategoryCost,
    GroupCost,
    SelectionError,
    SelectionValidationResult,
)


def _dedupe(ids: Sequence[UUID]) -> List[UUID]:
    seen = []
    for assembly_id in ids:
        if assembly_id not in seen:
            seen.append(assembly_id)
    return seen


def _conflicts(item, other) -> bool:
    """True when either item lists the other in conflicts_with."""
    return (
        str(other.assembly_id) in {str(x) for x in item.conflicts_with or []}
        or str(item.assembly_id) in {str(x) for x in other.conflicts_with or []}
    )


def _item_name(item) -> str:
    return item.assembly.name if item.assembly is not None else str(item.assembly_id)


def default_selection(group) -> List[UUID]:
    """Assemblies pre-selected when a group is first shown."""
    defaults = [item.assembly_id for item in group.items if item.is_default]
    if group.group_type == GroupType.CHOOSE_ONE:
        return defaults[:1]
    return defaults


def validate_group_selection(group, chosen_ids: Sequence[UUID]) -> Tuple[List[SelectionError], List[str]]:
    """
    Check one group's chosen assemblies against its selection rule.

    Args:
        group: AssemblyGroup with items loaded
        chosen_ids: Assembly ids the user picked in this group

    Returns:
        (errors, warnings); chosen ids that are not items of the group only warn
    """
    errors: List[SelectionError] = []
    warnings: List[str] = []

    items_by_assembly = {item.assembly_id: item for item in group.items}
    chosen: List = []
    for assembly_id in _dedupe(chosen_ids):
        item = items_by_assembly.get(assembly_id)
        if item is None:
            warnings.append(f'Assembly {assembly_id} is not part of group "{group.name}" and was ignored')
        else:
            chosen.append(item)

    if group.group_type == GroupType.REQUIRED:
        chosen_set = {item.assembly_id for item in chosen}
        missing = [item for item in group.items if item.assembly_id not in chosen_set]
        if missing:
            errors.append(SelectionError(
                type="required",
                group_id=group.id,
                message=f'Group "{group.name}" requires all {len(group.items)} items to be selected',
                details={
                    "required": len(group.items),
                    "selected": len(chosen),
                    "missing": [_item_name(item) for item in missing],
                },
            ))

    elif group.group_type == GroupType.CHOOSE_ONE:
        if len(chosen) != 1:
            errors.append(SelectionError(
                type="choose_one",
                group_id=group.id,
                message=f'Group "{group.name}" requires exactly one item to be selected',
                details={"selected": len(chosen), "available": len(group.items)},
            ))

    elif group.group_type == GroupType.CONFLICT:
        for item, other in combinations(chosen, 2):
            if _conflicts(item, other):
                errors.append(SelectionError(
                    type="conflict",
                    group_id=group.id,
                    message=f'Conflicting items selected in group "{group.name}"',
                    details={"item": _item_name(item), "conflicts": [_item_name(other)]},
                ))

    return errors, warnings


def price_group_selection(group, chosen_ids: Sequence[UUID]) -> GroupCost:
    """Cost of the chosen items: assembly unit cost times the item quantity."""
    items_by_assembly = {item.assembly_id: item for item in group.items}
    cost = GroupCost(group_id=group.id, group_name=group.name)
    for assembly_id in _dedupe(chosen_ids):
        item = items_by_assembly.get(assembly_id)
        if item is None or item.assembly is None:
            continue
        quantity = item.quantity or 1
        unit_cost = item.assembly.unit_cost
        line = AssemblyCost(
            assembly_id=assembly_id,
            name=item.assembly.name,
            quantity=quantity,
            unit_cost=unit_cost,
            cost=unit_cost * quantity,
        )
        cost.assemblies.append(line)
        cost.cost += line.cost
    return cost


def validate_selections(
    groups: Mapping[UUID, object],
    selections: Mapping[UUID, Mapping[UUID, Sequence[UUID]]],
) -> SelectionValidationResult:
    """
    Validate and price a whole selection across categories.

    Args:
        groups: Loaded groups keyed by id; must cover every group named in selections
        selections: {category_id: {group_id: [assembly_id, ...]}}
    """
    errors: List[SelectionError] = []
    warnings: List[str] = []
    breakdown: Dict[UUID, CategoryCost] = {}
    total_cost = 0.0

    for category_id, group_selections in selections.items():
        for group_id, chosen_ids in group_selections.items():
            group = groups.get(group_id)
            if group is None:
                warnings.append(f"Assembly group {group_id} not found")
                continue
            if group.category_id != category_id:
                warnings.append(f'Group "{group.name}" does not belong to category {category_id}')
                continue

            group_errors, group_warnings = validate_group_selection(group, chosen_ids)
            errors.extend(group_errors)
            warnings.extend(group_warnings)

            group_cost = price_group_selection(group, chosen_ids)
            category_cost = breakdown.get(category_id)
            if category_cost is None:
                category_name = group.category.name if group.category is not None else str(category_id)
                category_cost = CategoryCost(category_id=category_id, category_name=category_name)
                breakdown[category_id] = category_cost
            category_cost.groups.append(group_cost)
            category_cost.cost += group_cost.cost
            total_cost += group_cost.cost

    return SelectionValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        total_cost=total_cost,
        breakdown=list(breakdown.values()),
    )
