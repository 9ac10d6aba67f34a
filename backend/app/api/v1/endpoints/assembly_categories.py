"""
Assembly category API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.assembly_category_controller import AssemblyCategoryController
from app.schemas.assembly_category import (
    AssemblyCategoryCreate,
    AssemblyCategoryUpdate,
    AssemblyCategoryResponse,
    AssemblyCategoryListResponse,
)
from app.schemas.common import BulkDeleteRequest, BulkDeleteResponse
from app.utils.list_view import ListViewState, list_view_params

router = APIRouter()


@router.post("", response_model=AssemblyCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_data: AssemblyCategoryCreate,
    db: AsyncSession = Depends(get_db),
) -> AssemblyCategoryResponse:
    """Create a new assembly category."""
    controller = AssemblyCategoryController(db)
    return await controller.create_category(category_data)


@router.get("", response_model=AssemblyCategoryListResponse)
async def list_categories(
    state: ListViewState = Depends(list_view_params),
    db: AsyncSession = Depends(get_db),
) -> AssemblyCategoryListResponse:
    """List assembly categories."""
    controller = AssemblyCategoryController(db)
    return await controller.list_categories(state)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_categories(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkDeleteResponse:
    """Delete several categories; ones still owning assemblies or groups are reported."""
    controller = AssemblyCategoryController(db)
    return await controller.bulk_delete_categories(request.ids)


@router.get("/{category_id}", response_model=AssemblyCategoryResponse)
async def get_category(
    category_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> AssemblyCategoryResponse:
    """Get assembly category by ID."""
    controller = AssemblyCategoryController(db)
    category = await controller.get_category(category_id)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly category not found",
        )
    return category


@router.put("/{category_id}", response_model=AssemblyCategoryResponse)
async def update_category(
    category_id: UUID,
    category_data: AssemblyCategoryUpdate,
    db: AsyncSession = Depends(get_db),
) -> AssemblyCategoryResponse:
    """Update an assembly category."""
    controller = AssemblyCategoryController(db)
    category = await controller.update_category(category_id, category_data)
    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly category not found",
        )
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete an assembly category that owns no assemblies or groups."""
    controller = AssemblyCategoryController(db)
    deleted = await controller.delete_category(category_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly category not found",
        )
