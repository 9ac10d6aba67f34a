"""
Template API endpoints, including the bill of quantities.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.template_controller import TemplateController
from app.schemas.assembly_group import SelectionValidationResult
from app.schemas.common import BulkDeleteRequest, BulkDeleteResponse
from app.schemas.template import (
    BoqResponse,
    TemplateCreate,
    TemplateListResponse,
    TemplateResponse,
    TemplateUpdate,
)
from app.utils.list_view import ListViewState, list_view_params

router = APIRouter()


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Template not found",
    )


@router.post("", response_model=TemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: TemplateCreate,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    """Create a template with its assembly lines and optional group selection."""
    controller = TemplateController(db)
    return await controller.create_template(template_data)


@router.get("", response_model=TemplateListResponse)
async def list_templates(
    state: ListViewState = Depends(list_view_params),
    db: AsyncSession = Depends(get_db),
) -> TemplateListResponse:
    """List templates with search, sort and pagination."""
    controller = TemplateController(db)
    return await controller.list_templates(state)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_templates(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkDeleteResponse:
    """Delete several templates; ones used by projects are reported, not deleted."""
    controller = TemplateController(db)
    return await controller.bulk_delete_templates(request.ids)


@router.get("/{template_id}", response_model=TemplateResponse)
async def get_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    controller = TemplateController(db)
    template = await controller.get_template(template_id)
    if not template:
        raise _not_found()
    return template


@router.put("/{template_id}", response_model=TemplateResponse)
async def update_template(
    template_id: UUID,
    template_data: TemplateUpdate,
    db: AsyncSession = Depends(get_db),
) -> TemplateResponse:
    """Update a template."""
    controller = TemplateController(db)
    template = await controller.update_template(template_id, template_data)
    if not template:
        raise _not_found()
    return template


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a template no project was created from."""
    controller = TemplateController(db)
    deleted = await controller.delete_template(template_id)
    if not deleted:
        raise _not_found()


@router.get("/{template_id}/boq", response_model=BoqResponse)
async def get_template_boq(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> BoqResponse:
    """Bill of quantities grouped by module, with consolidated materials."""
    controller = TemplateController(db)
    boq = await controller.get_boq(template_id)
    if boq is None:
        raise _not_found()
    return boq


@router.get("/{template_id}/validate-selection", response_model=SelectionValidationResult)
async def validate_template_selection(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> SelectionValidationResult:
    """Re-check the stored group selection against the current assembly groups."""
    controller = TemplateController(db)
    result = await controller.validate_selection(template_id)
    if result is None:
        raise _not_found()
    return result
