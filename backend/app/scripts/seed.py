"""
Seed the database from JSON fixtures.

Usage:
    python -m app.scripts.seed [--data-dir DIR] [--only NAME ...] [--create-tables]

Fixtures are loaded in dependency order and matched on natural keys, so the
script can be re-run to update existing records.
"""

import argparse
import asyncio
import json
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import AppException
from app.core.logging import setup_logging, get_logger
from app.core.security import hash_password
from app.db import session as db_session
from app.db.init_db import create_tables
from app.db.repositories.assembly_category_repository import AssemblyCategoryRepository
from app.db.repositories.assembly_group_repository import AssemblyGroupRepository
from app.db.repositories.assembly_repository import AssemblyRepository
from app.db.repositories.client_repository import ClientRepository
from app.db.repositories.material_repository import MaterialRepository
from app.db.repositories.template_repository import TemplateRepository
from app.db.repositories.user_repository import UserRepository
from app.schemas.assembly import AssemblyBase
from app.schemas.assembly_category import AssemblyCategoryCreate
from app.schemas.assembly_group import AssemblyGroupBase
from app.schemas.client import ClientCreate
from app.schemas.material import MaterialCreate
from app.schemas.template import TemplateBase
from app.schemas.user import UserCreate

logger = get_logger(__name__)

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "db" / "seeds"

# (created, updated, skipped)
Counts = Tuple[int, int, int]


class SeedError(ValueError):
    """A fixture record references something that does not exist."""


def load_fixture(data_dir: Path, name: str) -> List[dict]:
    path = data_dir / f"{name}.json"
    if not path.exists():
        logger.warning("Fixture file missing", extra={"fixture": name, "path": str(path)})
        return []
    with path.open(encoding="utf-8") as fh:
        return json.load(fh)


async def _upsert(repo, key: Dict, values: Dict) -> bool:
    """Create or update the record matching key; True when created."""
    existing = await repo.get_by(**key)
    if existing is None:
        await repo.create(**key, **values)
        return True
    await repo.update(existing.id, **values)
    return False


async def _seed_rows(session: AsyncSession, name: str, rows: List[dict], apply: Callable) -> Counts:
    """Apply each row in its own commit; a rejected row is rolled back and skipped."""
    created = updated = skipped = 0
    for row in rows:
        try:
            was_created = await apply(row)
            await session.commit()
        except (ValidationError, SeedError, AppException, IntegrityError) as e:
            await session.rollback()
            skipped += 1
            logger.warning("Skipping fixture record", extra={"fixture": name, "record": row.get("name") or row.get("email"), "error": str(e)})
            continue
        if was_created:
            created += 1
        else:
            updated += 1
    return created, updated, skipped


async def seed_users(session: AsyncSession, rows: List[dict]) -> Counts:
    repo = UserRepository(session)

    async def apply(row: dict) -> bool:
        data = UserCreate(**row)
        values = data.model_dump(exclude={"email", "password"})
        values["password_hash"] = hash_password(data.password)
        return await _upsert(repo, {"email": data.email}, values)

    return await _seed_rows(session, "users", rows, apply)


async def seed_clients(session: AsyncSession, rows: List[dict]) -> Counts:
    repo = ClientRepository(session)

    async def apply(row: dict) -> bool:
        data = ClientCreate(**row)
        return await _upsert(repo, {"contact_email": data.contact_email}, data.model_dump(exclude={"contact_email"}))

    return await _seed_rows(session, "clients", rows, apply)


async def seed_materials(session: AsyncSession, rows: List[dict]) -> Counts:
    repo = MaterialRepository(session)

    async def apply(row: dict) -> bool:
        data = MaterialCreate(**row)
        return await _upsert(repo, {"name": data.name}, data.model_dump(exclude={"name"}))

    return await _seed_rows(session, "materials", rows, apply)


async def seed_assembly_categories(session: AsyncSession, rows: List[dict]) -> Counts:
    repo = AssemblyCategoryRepository(session)

    async def apply(row: dict) -> bool:
        data = AssemblyCategoryCreate(**row)
        return await _upsert(repo, {"name": data.name}, data.model_dump(exclude={"name"}))

    return await _seed_rows(session, "assembly_categories", rows, apply)


async def _category_id(session: AsyncSession, name: str):
    category = await AssemblyCategoryRepository(session).get_by(name=name)
    if category is None:
        raise SeedError(f"Unknown category: {name}")
    return category.id


async def seed_assemblies(session: AsyncSession, rows: List[dict]) -> Counts:
    """Assemblies name their category and materials; the material list is replaced."""
    repo = AssemblyRepository(session)
    material_repo = MaterialRepository(session)

    async def apply(row: dict) -> bool:
        row = dict(row)
        material_lines = row.pop("materials", [])
        row["category_id"] = await _category_id(session, row.pop("category"))
        data = AssemblyBase(**row)

        lines = []
        for line in material_lines:
            material = await material_repo.get_by(name=line["material"])
            if material is None:
                raise SeedError(f"Unknown material: {line['material']}")
            lines.append((material.id, float(line.get("quantity", 1))))

        created = await _upsert(repo, {"name": data.name}, data.model_dump(exclude={"name"}))
        assembly = await repo.get_by(name=data.name)
        await repo.clear_materials(assembly.id)
        for material_id, quantity in lines:
            await repo.add_material(assembly.id, material_id, quantity)
        return created

    return await _seed_rows(session, "assemblies", rows, apply)


async def seed_assembly_groups(session: AsyncSession, rows: List[dict]) -> Counts:
    """Groups are keyed by category and name; items name their assemblies."""
    repo = AssemblyGroupRepository(session)
    assembly_repo = AssemblyRepository(session)

    async def apply(row: dict) -> bool:
        row = dict(row)
        items = row.pop("items", [])
        category_id = await _category_id(session, row.pop("category"))
        data = AssemblyGroupBase(**row)

        assembly_ids = {}
        for item in items:
            assembly = await assembly_repo.get_by(name=item["assembly"])
            if assembly is None or assembly.category_id != category_id:
                raise SeedError(f"Unknown assembly in category: {item['assembly']}")
            assembly_ids[item["assembly"]] = assembly.id

        item_rows = []
        for index, item in enumerate(items):
            conflicts = []
            for name in item.get("conflicts_with", []):
                if name not in assembly_ids:
                    raise SeedError(f"Conflict names an assembly outside the group: {name}")
                conflicts.append(str(assembly_ids[name]))
            item_rows.append({
                "assembly_id": assembly_ids[item["assembly"]],
                "quantity": int(item.get("quantity", 1)),
                "conflicts_with": conflicts,
                "is_default": bool(item.get("is_default", False)),
                "sort_order": int(item.get("sort_order", index)),
            })

        group = await repo.get_by(category_id=category_id, name=data.name)
        created = group is None
        if created:
            group = await repo.create(category_id=category_id, **data.model_dump())
        else:
            await repo.update(group.id, **data.model_dump(exclude={"name"}))
            await repo.clear_items(group.id)

        for values in item_rows:
            await repo.add_item(group.id, **values)
        return created

    return await _seed_rows(session, "assembly_groups", rows, apply)


async def seed_templates(session: AsyncSession, rows: List[dict]) -> Counts:
    """Templates name their assemblies; the assembly lines are replaced."""
    repo = TemplateRepository(session)
    assembly_repo = AssemblyRepository(session)

    async def apply(row: dict) -> bool:
        row = dict(row)
        assembly_lines = row.pop("assemblies", [])
        data = TemplateBase(**row)

        lines = []
        for line in assembly_lines:
            assembly = await assembly_repo.get_by(name=line["assembly"])
            if assembly is None:
                raise SeedError(f"Unknown assembly: {line['assembly']}")
            lines.append((assembly.id, float(line.get("quantity", 1))))

        created = await _upsert(repo, {"name": data.name}, data.model_dump(exclude={"name"}))
        template = await repo.get_by(name=data.name)
        await repo.clear_assemblies(template.id)
        for index, (assembly_id, quantity) in enumerate(lines):
            await repo.add_assembly(template.id, assembly_id, quantity, index)
        return created

    return await _seed_rows(session, "templates", rows, apply)


# Dependency order
SEEDERS = {
    "users": seed_users,
    "clients": seed_clients,
    "materials": seed_materials,
    "assembly_categories": seed_assembly_categories,
    "assemblies": seed_assemblies,
    "assembly_groups": seed_assembly_groups,
    "templates": seed_templates,
}


async def run_seed(session: AsyncSession, data_dir: Path, only: Optional[List[str]] = None) -> Dict[str, Counts]:
    """Load each selected fixture in dependency order."""
    summary = {}
    for name, seeder in SEEDERS.items():
        if only and name not in only:
            continue
        rows = load_fixture(data_dir, name)
        counts = await seeder(session, rows)
        summary[name] = counts
        logger.info(
            f"Seeded {name}",
            extra={"fixture": name, "records_created": counts[0], "records_updated": counts[1], "records_skipped": counts[2]},
        )
    return summary


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed the QuickBom database from JSON fixtures.")
    parser.add_argument(
        "--data-dir",
        default=settings.SEED_DATA_DIR or str(DEFAULT_DATA_DIR),
        help="Directory holding <fixture>.json files",
    )
    parser.add_argument(
        "--only",
        nargs="+",
        choices=list(SEEDERS),
        help="Seed only these fixtures (dependency order is kept)",
    )
    parser.add_argument("--create-tables", action="store_true", help="Create missing tables first")
    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging()

    if args.create_tables:
        await create_tables()
    await db_session.init_db()

    try:
        async with db_session.async_session_maker() as session:
            summary = await run_seed(session, Path(args.data_dir), args.only)
    finally:
        await db_session.close_db()

    for name, (created, updated, skipped) in summary.items():
        print(f"{name}: {created} created, {updated} updated, {skipped} skipped")


if __name__ == "__main__":
    asyncio.run(main())
