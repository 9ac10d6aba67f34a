"""
Seed script tests against the in-memory database.
"""

import json

import pytest

from app.db.repositories.assembly_group_repository import AssemblyGroupRepository
from app.db.repositories.assembly_repository import AssemblyRepository
from app.db.repositories.user_repository import UserRepository
from app.models.assembly_group import GroupType
from app.scripts.seed import DEFAULT_DATA_DIR, parse_args, run_seed


@pytest.mark.asyncio
async def test_seed_loads_every_fixture(test_db_session):
    summary = await run_seed(test_db_session, DEFAULT_DATA_DIR)

    assert summary == {
        "users": (4, 0, 0),
        "clients": (3, 0, 0),
        "materials": (13, 0, 0),
        "assembly_categories": (3, 0, 0),
        "assemblies": (8, 0, 0),
        "assembly_groups": (5, 0, 0),
        "templates": (2, 0, 0),
    }


@pytest.mark.asyncio
async def test_seed_is_rerunnable(test_db_session):
    await run_seed(test_db_session, DEFAULT_DATA_DIR)

    summary = await run_seed(test_db_session, DEFAULT_DATA_DIR, only=["materials", "assemblies"])

    assert summary == {"materials": (0, 13, 0), "assemblies": (0, 8, 0)}
    assembly = await AssemblyRepository(test_db_session).get_by(name="Main Panel 3 Phase")
    assembly = await AssemblyRepository(test_db_session).get(assembly.id)
    assert len(assembly.materials) == 3


@pytest.mark.asyncio
async def test_seeded_group_conflicts_resolve_to_assembly_ids(test_db_session):
    await run_seed(test_db_session, DEFAULT_DATA_DIR)

    groups = await AssemblyGroupRepository(test_db_session).list_for_category()
    luminaires = next(g for g in groups if g.name == "Ceiling Luminaires")
    by_name = {item.assembly.name: item for item in luminaires.items}

    assert luminaires.group_type == GroupType.CONFLICT
    assert by_name["Downlight Point"].conflicts_with == [str(by_name["Panel Light Point"].assembly_id)]
    assert by_name["Downlight Point"].quantity == 8


@pytest.mark.asyncio
async def test_seed_skips_records_with_unknown_references(test_db_session, tmp_path):
    (tmp_path / "assembly_categories.json").write_text(json.dumps([{"name": "Lighting"}]))
    (tmp_path / "assemblies.json").write_text(json.dumps([
        {"name": "Lamp", "category": "Lighting", "materials": [{"material": "Nope", "quantity": 1}]},
        {"name": "Fan", "category": "Ventilation"},
        {"name": "Bare Lamp", "category": "Lighting", "price": 10},
    ]))

    summary = await run_seed(test_db_session, tmp_path)

    assert summary["assemblies"] == (1, 0, 2)
    # Missing fixture files seed nothing
    assert summary["users"] == (0, 0, 0)


def test_parse_args_defaults_to_bundled_fixtures():
    args = parse_args([])

    assert args.data_dir == str(DEFAULT_DATA_DIR)
    assert args.only is None
    assert args.create_tables is False

    args = parse_args(["--only", "materials", "assemblies", "--create-tables"])
    assert args.only == ["materials", "assemblies"]
    assert args.create_tables is True


@pytest.mark.asyncio
async def test_seed_skips_rows_that_break_unique_constraints(test_db_session, tmp_path):
    (tmp_path / "users.json").write_text(json.dumps([
        {"email": "a@quickbom.co.id", "password": "s3cret-pass", "name": "A", "employee_id": "EMP1"},
        {"email": "b@quickbom.co.id", "password": "s3cret-pass", "name": "B", "employee_id": "EMP1"},
        {"email": "c@quickbom.co.id", "password": "s3cret-pass", "name": "C", "employee_id": "EMP2"},
    ]))

    summary = await run_seed(test_db_session, tmp_path, only=["users"])

    assert summary == {"users": (2, 0, 1)}
    users = UserRepository(test_db_session)
    assert await users.get_by(email="a@quickbom.co.id") is not None
    assert await users.get_by(email="b@quickbom.co.id") is None
    assert await users.get_by(email="c@quickbom.co.id") is not None
