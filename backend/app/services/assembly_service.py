"""
Assembly service with business logic.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, NotFoundException, ValidationException
from app.core.logging import get_logger
from app.db.repositories.assembly_category_repository import AssemblyCategoryRepository
from app.db.repositories.assembly_repository import AssemblyRepository
from app.db.repositories.material_repository import MaterialRepository
from app.schemas.assembly import AssemblyCreate, AssemblyUpdate, AssemblyResponse, AssemblyMaterialInput
from app.services.base_service import BaseService
from app.models.assembly import AssemblyModule
from app.utils.list_view import ListViewState, parse_enum_filters

logger = get_logger(__name__)


class AssemblyService(BaseService):
    """Service for assembly operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.assembly_repo = AssemblyRepository(session)
        self.category_repo = AssemblyCategoryRepository(session)
        self.material_repo = MaterialRepository(session)

    async def _check_category(self, category_id: UUID) -> None:
        if not await self.category_repo.exists(category_id):
            raise NotFoundException("Assembly category not found", details={"category_id": str(category_id)})

    async def _check_materials(self, lines: List[AssemblyMaterialInput]) -> None:
        seen = set()
        for line in lines:
            if line.material_id in seen:
                raise ValidationException(
                    "Duplicate material in assembly",
                    details={"material_id": str(line.material_id)},
                )
            seen.add(line.material_id)
            if not await self.material_repo.exists(line.material_id):
                raise ValidationException(
                    "Material not found",
                    details={"material_id": str(line.material_id)},
                )

    async def _ensure_name_free(self, name: str, current_id: Optional[UUID] = None) -> None:
        existing = await self.assembly_repo.get_by(name=name)
        if existing is not None and existing.id != current_id:
            raise ConflictException("Assembly name already exists", f"An assembly named '{name}' already exists")

    async def create_assembly(self, assembly_data: AssemblyCreate) -> AssemblyResponse:
        """Create an assembly together with its bill of materials."""
        await self._check_category(assembly_data.category_id)
        await self._check_materials(assembly_data.materials)
        await self._ensure_name_free(assembly_data.name)

        assembly_dict = assembly_data.model_dump(exclude_unset=True, exclude={"materials"})
        assembly = await self.assembly_repo.create(**assembly_dict)
        for line in assembly_data.materials:
            await self.assembly_repo.add_material(assembly.id, line.material_id, line.quantity)
        await self.session.commit()

        logger.info(
            "Assembly created",
            extra={"assembly_id": str(assembly.id), "material_lines": len(assembly_data.materials)},
        )
        assembly = await self.assembly_repo.get(assembly.id)
        return AssemblyResponse.model_validate(assembly)

    async def get_assembly(self, assembly_id: UUID) -> Optional[AssemblyResponse]:
        assembly = await self.assembly_repo.get(assembly_id)
        if not assembly:
            return None
        return AssemblyResponse.model_validate(assembly)

    async def list_assemblies(self, state: ListViewState) -> Tuple[List[AssemblyResponse], int]:
        assemblies, total = await self.assembly_repo.list_view(parse_enum_filters(state, {"module": AssemblyModule}))
        return [AssemblyResponse.model_validate(a) for a in assemblies], total

    async def update_assembly(self, assembly_id: UUID, assembly_data: AssemblyUpdate) -> Optional[AssemblyResponse]:
        """Update an assembly; a provided materials list replaces the bill of materials."""
        assembly = await self.assembly_repo.get(assembly_id)
        if not assembly:
            return None

        update_dict = assembly_data.model_dump(exclude_unset=True, exclude={"materials"})
        if update_dict.get("category_id") and update_dict["category_id"] != assembly.category_id:
            await self._check_category(update_dict["category_id"])
            # Group items must stay in their group's category
            usages = await self.assembly_repo.count_group_usages(assembly_id)
            if usages:
                raise ConflictException(
                    "Assembly is used by assembly groups",
                    f"Remove the assembly from {usages} group(s) before moving it to another category",
                    {"group_usages": usages},
                )
        if update_dict.get("name"):
            await self._ensure_name_free(update_dict["name"], assembly_id)

        materials = assembly_data.materials if "materials" in assembly_data.model_fields_set else None
        if materials is not None:
            await self._check_materials(materials)

        await self.assembly_repo.update(assembly_id, **update_dict)
        if materials is not None:
            await self.assembly_repo.clear_materials(assembly_id)
            for line in materials:
                await self.assembly_repo.add_material(assembly_id, line.material_id, line.quantity)
        await self.session.commit()

        updated = await self.assembly_repo.get(assembly_id)
        return AssemblyResponse.model_validate(updated)

    async def delete_assembly(self, assembly_id: UUID) -> bool:
        """Delete an assembly and its bill of materials unless a group or template still uses it."""
        if not await self.assembly_repo.exists(assembly_id):
            return False

        usages = await self.assembly_repo.count_group_usages(assembly_id)
        if usages:
            raise ConflictException(
                "Assembly is used by assembly groups",
                f"Assembly is an item of {usages} group(s)",
                {"group_usages": usages},
            )
        template_usages = await self.assembly_repo.count_template_usages(assembly_id)
        if template_usages:
            raise ConflictException(
                "Assembly is used by templates",
                f"Assembly is a line of {template_usages} template(s)",
                {"template_usages": template_usages},
            )

        await self.assembly_repo.clear_materials(assembly_id)
        deleted = await self.assembly_repo.delete(assembly_id)
        await self.session.commit()
        return deleted

    async def bulk_delete_assemblies(self, ids: List[UUID]):
        return await self.bulk_delete(ids, self.delete_assembly)
