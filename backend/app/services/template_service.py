"""
Template service: template CRUD, stored group selections and the bill of quantities.
"""

from typing import Dict, List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, NotFoundException, ValidationException
from app.core.logging import get_logger
from app.db.repositories.assembly_group_repository import AssemblyGroupRepository
from app.db.repositories.assembly_repository import AssemblyRepository
from app.db.repositories.project_repository import ProjectRepository
from app.db.repositories.template_repository import TemplateRepository
from app.models.template import Template
from app.schemas.assembly_group import SelectionValidationResult
from app.schemas.template import (
    BoqResponse,
    Selections,
    TemplateAssemblyInput,
    TemplateCreate,
    TemplateResponse,
    TemplateUpdate,
)
from app.services.base_service import BaseService
from app.services.boq_calculator import build_boq, template_cost
from app.services.selection_rules import validate_selections
from app.utils.list_view import ListViewState

logger = get_logger(__name__)


def _parse_selections(raw: Optional[dict]) -> Selections:
    if not raw:
        return {}
    return {
        UUID(str(category_id)): {
            UUID(str(group_id)): [UUID(str(a)) for a in assembly_ids]
            for group_id, assembly_ids in by_group.items()
        }
        for category_id, by_group in raw.items()
    }


def _dump_selections(selections: Optional[Selections]) -> Optional[Dict[str, Dict[str, List[str]]]]:
    if selections is None:
        return None
    return {
        str(category_id): {
            str(group_id): [str(a) for a in assembly_ids]
            for group_id, assembly_ids in by_group.items()
        }
        for category_id, by_group in selections.items()
    }


class TemplateService(BaseService):
    """Service for template operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.template_repo = TemplateRepository(session)
        self.assembly_repo = AssemblyRepository(session)
        self.group_repo = AssemblyGroupRepository(session)
        self.project_repo = ProjectRepository(session)

    def _to_response(self, template: Template) -> TemplateResponse:
        response = TemplateResponse.model_validate(template)
        response.total_cost = template_cost(template.assemblies)
        response.project_count = len(template.projects)
        return response

    async def _ensure_name_free(self, name: str, current_id: Optional[UUID] = None) -> None:
        existing = await self.template_repo.get_by(name=name)
        if existing is not None and existing.id != current_id:
            raise ConflictException("Template name already exists", f"A template named '{name}' already exists")

    async def _check_assemblies(self, lines: List[TemplateAssemblyInput]) -> None:
        assembly_ids = [line.assembly_id for line in lines]
        if len(set(assembly_ids)) != len(assembly_ids):
            raise ValidationException("An assembly can appear only once in a template")
        found = {a.id for a in await self.assembly_repo.list_by_ids(assembly_ids)}
        for assembly_id in assembly_ids:
            if assembly_id not in found:
                raise ValidationException("Assembly not found", details={"assembly_id": str(assembly_id)})

    async def _validate(self, selections: Selections) -> SelectionValidationResult:
        group_ids = list({gid for by_group in selections.values() for gid in by_group})
        groups = {g.id: g for g in await self.group_repo.list_by_ids(group_ids)}
        return validate_selections(groups, selections)

    async def _check_selection(self, selections: Optional[Selections]) -> None:
        """A stored selection must validate cleanly against the current groups."""
        if not selections:
            return
        result = await self._validate(selections)
        if not result.is_valid or result.warnings:
            raise ValidationException(
                "Invalid assembly selection",
                details={
                    "errors": [e.model_dump(mode="json") for e in result.errors],
                    "warnings": result.warnings,
                },
            )

    async def _add_lines(self, template_id: UUID, lines: List[TemplateAssemblyInput]) -> None:
        for index, line in enumerate(lines):
            await self.template_repo.add_assembly(template_id, line.assembly_id, line.quantity, index)

    async def create_template(self, template_data: TemplateCreate) -> TemplateResponse:
        """Create a template with its assembly lines."""
        await self._ensure_name_free(template_data.name)
        await self._check_assemblies(template_data.assemblies)
        await self._check_selection(template_data.assembly_selections)

        template = await self.template_repo.create(
            name=template_data.name,
            description=template_data.description,
            assembly_selections=_dump_selections(template_data.assembly_selections),
        )
        await self._add_lines(template.id, template_data.assemblies)
        await self.session.commit()

        logger.info(
            "Template created",
            extra={"template_id": str(template.id), "assembly_lines": len(template_data.assemblies)},
        )
        template = await self.template_repo.get(template.id)
        return self._to_response(template)

    async def get_template(self, template_id: UUID) -> Optional[TemplateResponse]:
        template = await self.template_repo.get(template_id)
        if not template:
            return None
        return self._to_response(template)

    async def list_templates(self, state: ListViewState) -> Tuple[List[TemplateResponse], int]:
        templates, total = await self.template_repo.list_view(state)
        return [self._to_response(t) for t in templates], total

    async def update_template(self, template_id: UUID, template_data: TemplateUpdate) -> Optional[TemplateResponse]:
        """Update a template; a provided assemblies list replaces the lines."""
        if not await self.template_repo.exists(template_id):
            return None

        fields = template_data.model_fields_set
        update_dict = template_data.model_dump(exclude_unset=True, exclude={"assemblies", "assembly_selections"})
        if update_dict.get("name"):
            await self._ensure_name_free(update_dict["name"], template_id)
        lines = template_data.assemblies if "assemblies" in fields else None
        if lines is not None:
            await self._check_assemblies(lines)
        if "assembly_selections" in fields:
            await self._check_selection(template_data.assembly_selections)
            update_dict["assembly_selections"] = _dump_selections(template_data.assembly_selections)

        await self.template_repo.update(template_id, **update_dict)
        if lines is not None:
            await self.template_repo.clear_assemblies(template_id)
            await self._add_lines(template_id, lines)
        await self.session.commit()

        updated = await self.template_repo.get(template_id)
        return self._to_response(updated)

    async def delete_template(self, template_id: UUID) -> bool:
        """Delete a template and its lines unless a project was created from it."""
        if not await self.template_repo.exists(template_id):
            return False

        projects = await self.template_repo.count_projects(template_id)
        if projects:
            raise ConflictException(
                "Template is used by projects",
                f"{projects} project(s) were created from this template",
                {"projects": projects},
            )

        await self.template_repo.clear_assemblies(template_id)
        deleted = await self.template_repo.delete(template_id)
        await self.session.commit()
        return deleted

    async def bulk_delete_templates(self, ids: List[UUID]):
        return await self.bulk_delete(ids, self.delete_template)

    async def validate_stored_selection(self, template_id: UUID) -> Optional[SelectionValidationResult]:
        """Re-validate a template's stored selection against the current groups."""
        template = await self.template_repo.get(template_id)
        if not template:
            return None
        return await self._validate(_parse_selections(template.assembly_selections))

    async def get_boq(self, template_id: UUID) -> Optional[BoqResponse]:
        template = await self.template_repo.get(template_id)
        if not template:
            return None
        summary = build_boq(template.assemblies)
        return BoqResponse(template_id=template.id, template_name=template.name, **summary.model_dump())

    async def project_boq(self, project_id: UUID) -> Optional[BoqResponse]:
        """Bill of quantities of the template a project was created from."""
        project = await self.project_repo.get(project_id)
        if not project:
            return None
        if project.from_template_id is None:
            raise ValidationException(
                "Project has no template",
                "A bill of quantities exists only for projects created from a template",
                {"project_id": str(project_id)},
            )
        template = await self.template_repo.get(project.from_template_id)
        if not template:
            raise NotFoundException("Template not found", details={"template_id": str(project.from_template_id)})
        summary = build_boq(template.assemblies)
        return BoqResponse(
            template_id=template.id,
            template_name=template.name,
            project_id=project.id,
            project_name=project.name,
            **summary.model_dump(),
        )

