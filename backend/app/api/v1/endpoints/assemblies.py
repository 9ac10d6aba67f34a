"""
Assembly API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.exports import export_response
from app.db.session import get_db
from app.controllers.assembly_controller import AssemblyController
from app.schemas.assembly import (
    AssemblyCreate,
    AssemblyUpdate,
    AssemblyResponse,
    AssemblyListResponse,
)
from app.schemas.common import BulkDeleteRequest, BulkDeleteResponse
from app.utils.list_view import ListViewState, list_view_params

router = APIRouter()


def assembly_list_view(
    state: ListViewState = Depends(list_view_params),
    category_id: Optional[UUID] = Query(None),
    module: Optional[str] = Query(None),
) -> ListViewState:
    return state.with_filters(category_id=category_id, module=module)


@router.post("", response_model=AssemblyResponse, status_code=status.HTTP_201_CREATED)
async def create_assembly(
    assembly_data: AssemblyCreate,
    db: AsyncSession = Depends(get_db),
) -> AssemblyResponse:
    """Create an assembly with its bill of materials."""
    controller = AssemblyController(db)
    return await controller.create_assembly(assembly_data)


@router.get("", response_model=AssemblyListResponse)
async def list_assemblies(
    state: ListViewState = Depends(assembly_list_view),
    db: AsyncSession = Depends(get_db),
) -> AssemblyListResponse:
    """List assemblies with search, filters, sort and pagination."""
    controller = AssemblyController(db)
    return await controller.list_assemblies(state)


@router.get("/export")
async def export_assemblies(
    fmt: str = Query("csv", alias="format"),
    state: ListViewState = Depends(assembly_list_view),
    db: AsyncSession = Depends(get_db),
):
    """Export the filtered assembly list as CSV or XLSX."""
    return await export_response(db, "assemblies", state, fmt)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_assemblies(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkDeleteResponse:
    """Delete several assemblies; ones still in use are reported, not deleted."""
    controller = AssemblyController(db)
    return await controller.bulk_delete_assemblies(request.ids)


@router.get("/{assembly_id}", response_model=AssemblyResponse)
async def get_assembly(
    assembly_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> AssemblyResponse:
    """Get assembly by ID."""
    controller = AssemblyController(db)
    assembly = await controller.get_assembly(assembly_id)
    if not assembly:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly not found",
        )
    return assembly


@router.put("/{assembly_id}", response_model=AssemblyResponse)
async def update_assembly(
    assembly_id: UUID,
    assembly_data: AssemblyUpdate,
    db: AsyncSession = Depends(get_db),
) -> AssemblyResponse:
    """Update an assembly."""
    controller = AssemblyController(db)
    assembly = await controller.update_assembly(assembly_id, assembly_data)
    if not assembly:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly not found",
        )
    return assembly


@router.delete("/{assembly_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_assembly(
    assembly_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete an assembly not used by any group or template."""
    controller = AssemblyController(db)
    deleted = await controller.delete_assembly(assembly_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Assembly not found",
        )
