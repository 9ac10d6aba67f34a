"""
Assembly group API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.assembly_group_controller import AssemblyGroupController
from app.schemas.assembly_group import (
    AssemblyGroupCreate,
    AssemblyGroupUpdate,
    AssemblyGroupResponse,
    AssemblyGroupListResponse,
    AssemblyGroupDeleteResponse,
    ItemQuantityUpdate,
    SelectionValidationRequest,
    SelectionValidationResult,
)

router = APIRouter()


@router.post("", response_model=AssemblyGroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: AssemblyGroupCreate,
    db: AsyncSession = Depends(get_db),
) -> AssemblyGroupResponse:
    """Create an assembly group with its items."""
    controller = AssemblyGroupController(db)
    return await controller.create_group(group_data)


@router.get("", response_model=AssemblyGroupListResponse)
async def list_groups(
    category_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> AssemblyGroupListResponse:
    """List assembly groups, optionally for one category."""
    controller = AssemblyGroupController(db)
    return await controller.list_groups(category_id)


@router.post("/validate-selection", response_model=SelectionValidationResult)
async def validate_selection(
    request: SelectionValidationRequest,
    db: AsyncSession = Depends(get_db),
) -> SelectionValidationResult:
    """Check chosen assemblies against their groups' rules and price them."""
    controller = AssemblyGroupController(db)
    return await controller.validate_selection(request)


@router.get("/{group_id}", response_model=AssemblyGroupResponse)
async def get_group(
    group_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> AssemblyGroupResponse:
    """Get assembly group by ID."""
    controller = AssemblyGroupController(db)
    group = await controller.get_group(group_id)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly group not found",
        )
    return group


@router.put("/{group_id}", response_model=AssemblyGroupResponse)
async def update_group(
    group_id: UUID,
    group_data: AssemblyGroupUpdate,
    db: AsyncSession = Depends(get_db),
) -> AssemblyGroupResponse:
    """Update an assembly group."""
    controller = AssemblyGroupController(db)
    group = await controller.update_group(group_id, group_data)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly group not found",
        )
    return group


@router.delete("/{group_id}", response_model=AssemblyGroupDeleteResponse)
async def delete_group(
    group_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> AssemblyGroupDeleteResponse:
    """Delete an assembly group and its items."""
    controller = AssemblyGroupController(db)
    result = await controller.delete_group(group_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly group not found",
        )
    return result


@router.patch("/{group_id}/items/{assembly_id}", response_model=AssemblyGroupResponse)
async def update_item_quantity(
    group_id: UUID,
    assembly_id: UUID,
    request: ItemQuantityUpdate,
    db: AsyncSession = Depends(get_db),
) -> AssemblyGroupResponse:
    """Set the quantity of one assembly inside a group."""
    controller = AssemblyGroupController(db)
    return await controller.set_item_quantity(group_id, assembly_id, request.quantity)
