"""
Material service with business logic.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException
from app.core.logging import get_logger
from app.db.repositories.material_repository import MaterialRepository
from app.schemas.material import MaterialCreate, MaterialUpdate, MaterialResponse
from app.services.base_service import BaseService
from app.utils.list_view import ListViewState

logger = get_logger(__name__)


class MaterialService(BaseService):
    """Service for material operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.material_repo = MaterialRepository(session)

    async def _ensure_name_free(self, name: str, current_id: Optional[UUID] = None) -> None:
        existing = await self.material_repo.get_by(name=name)
        if existing is not None and existing.id != current_id:
            raise ConflictException("Material name already exists", f"A material named '{name}' already exists")

    async def create_material(self, material_data: MaterialCreate) -> MaterialResponse:
        """Create a new material."""
        await self._ensure_name_free(material_data.name)
        material = await self.material_repo.create(**material_data.model_dump(exclude_unset=True))
        await self.session.commit()
        logger.info("Material created", extra={"material_id": str(material.id)})
        return MaterialResponse.model_validate(material)

    async def get_material(self, material_id: UUID) -> Optional[MaterialResponse]:
        material = await self.material_repo.get(material_id)
        if not material:
            return None
        return MaterialResponse.model_validate(material)

    async def list_materials(self, state: ListViewState) -> Tuple[List[MaterialResponse], int]:
        """List materials matching the list-view state."""
        materials, total = await self.material_repo.list_view(state)
        return [MaterialResponse.model_validate(m) for m in materials], total

    async def update_material(self, material_id: UUID, material_data: MaterialUpdate) -> Optional[MaterialResponse]:
        """Update a material."""
        material = await self.material_repo.get(material_id)
        if not material:
            return None

        update_dict = material_data.model_dump(exclude_unset=True)
        if update_dict.get("name"):
            await self._ensure_name_free(update_dict["name"], material_id)
        updated = await self.material_repo.update(material_id, **update_dict)
        await self.session.commit()
        return MaterialResponse.model_validate(updated)

    async def delete_material(self, material_id: UUID) -> bool:
        """Delete a material unless an assembly still uses it."""
        if not await self.material_repo.exists(material_id):
            return False

        usages = await self.material_repo.count_assembly_usages(material_id)
        if usages:
            raise ConflictException(
                "Material is used by assemblies",
                f"Material is referenced by {usages} assembly line(s)",
                {"assembly_usages": usages},
            )

        deleted = await self.material_repo.delete(material_id)
        await self.session.commit()
        return deleted

    async def bulk_delete_materials(self, ids: List[UUID]):
        return await self.bulk_delete(ids, self.delete_material)
