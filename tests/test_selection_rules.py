"""
Selection rule tests on plain objects; no database involved.
"""

import uuid
from types import SimpleNamespace

from app.models.assembly_group import GroupType
from app.services.selection_rules import (
    default_selection,
    price_group_selection,
    validate_group_selection,
    validate_selections,
)


def _assembly(name, unit_cost):
    return SimpleNamespace(id=uuid.uuid4(), name=name, unit_cost=unit_cost)


def _item(assembly, quantity=1, conflicts_with=(), is_default=False):
    return SimpleNamespace(
        assembly_id=assembly.id,
        assembly=assembly,
        quantity=quantity,
        conflicts_with=[str(x) for x in conflicts_with],
        is_default=is_default,
    )


def _group(group_type, items, name="Group", category=None):
    category = category or SimpleNamespace(id=uuid.uuid4(), name="Electrical")
    return SimpleNamespace(
        id=uuid.uuid4(),
        name=name,
        group_type=group_type,
        items=items,
        category_id=category.id,
        category=category,
    )


def test_required_group_needs_every_item():
    a, b = _assembly("A", 10), _assembly("B", 20)
    group = _group(GroupType.REQUIRED, [_item(a), _item(b)])

    errors, _ = validate_group_selection(group, [a.id])
    assert [e.type for e in errors] == ["required"]
    assert errors[0].details["missing"] == ["B"]

    errors, _ = validate_group_selection(group, [b.id, a.id])
    assert errors == []


def test_choose_one_group_needs_exactly_one():
    a, b = _assembly("A", 10), _assembly("B", 20)
    group = _group(GroupType.CHOOSE_ONE, [_item(a), _item(b)])

    assert [e.type for e in validate_group_selection(group, [])[0]] == ["choose_one"]
    assert [e.type for e in validate_group_selection(group, [a.id, b.id])[0]] == ["choose_one"]
    assert validate_group_selection(group, [b.id])[0] == []


def test_duplicate_ids_count_once():
    a, b = _assembly("A", 10), _assembly("B", 20)
    group = _group(GroupType.CHOOSE_ONE, [_item(a), _item(b)])

    errors, _ = validate_group_selection(group, [a.id, a.id])

    assert errors == []


def test_optional_group_accepts_anything():
    a = _assembly("A", 10)
    group = _group(GroupType.OPTIONAL, [_item(a)])

    assert validate_group_selection(group, [])[0] == []
    assert validate_group_selection(group, [a.id])[0] == []


def test_conflict_declared_on_either_side_is_reported_once():
    a, b, c = _assembly("A", 10), _assembly("B", 20), _assembly("C", 30)
    group = _group(GroupType.CONFLICT, [_item(a), _item(b, conflicts_with=[a.id]), _item(c)])

    errors, _ = validate_group_selection(group, [a.id, b.id, c.id])

    assert len(errors) == 1
    assert errors[0].type == "conflict"
    assert {errors[0].details["item"], *errors[0].details["conflicts"]} == {"A", "B"}


def test_ids_outside_the_group_only_warn():
    a, stranger = _assembly("A", 10), _assembly("X", 99)
    group = _group(GroupType.OPTIONAL, [_item(a)])

    errors, warnings = validate_group_selection(group, [stranger.id])

    assert errors == []
    assert len(warnings) == 1


def test_price_uses_unit_cost_times_item_quantity():
    a, b = _assembly("A", 12.5), _assembly("B", 20)
    group = _group(GroupType.OPTIONAL, [_item(a, quantity=4), _item(b)])

    cost = price_group_selection(group, [a.id, b.id, a.id])

    assert cost.cost == 70
    assert [(line.name, line.cost) for line in cost.assemblies] == [("A", 50), ("B", 20)]


def test_default_selection_keeps_first_default_for_choose_one():
    a, b = _assembly("A", 1), _assembly("B", 2)

    optional = _group(GroupType.OPTIONAL, [_item(a, is_default=True), _item(b, is_default=True)])
    choose = _group(GroupType.CHOOSE_ONE, [_item(a, is_default=True), _item(b, is_default=True)])

    assert default_selection(optional) == [a.id, b.id]
    assert default_selection(choose) == [a.id]


def test_validate_selections_totals_by_category():
    category = SimpleNamespace(id=uuid.uuid4(), name="Electrical")
    a, b = _assembly("A", 100), _assembly("B", 50)
    first = _group(GroupType.REQUIRED, [_item(a, quantity=2)], name="Base", category=category)
    second = _group(GroupType.OPTIONAL, [_item(b)], name="Extras", category=category)
    groups = {first.id: first, second.id: second}

    result = validate_selections(groups, {category.id: {first.id: [a.id], second.id: [b.id]}})

    assert result.is_valid
    assert result.total_cost == 250
    assert len(result.breakdown) == 1
    assert result.breakdown[0].cost == 250
    assert [g.group_name for g in result.breakdown[0].groups] == ["Base", "Extras"]


def test_validate_selections_warns_on_wrong_category():
    a = _assembly("A", 100)
    group = _group(GroupType.REQUIRED, [_item(a)])

    result = validate_selections({group.id: group}, {uuid.uuid4(): {group.id: []}})

    assert result.is_valid
    assert result.total_cost == 0
    assert len(result.warnings) == 1
