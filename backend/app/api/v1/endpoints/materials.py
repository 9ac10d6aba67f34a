"""
Material API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.exports import export_response
from app.db.session import get_db
from app.controllers.material_controller import MaterialController
from app.schemas.common import BulkDeleteRequest, BulkDeleteResponse
from app.schemas.material import (
    MaterialCreate,
    MaterialUpdate,
    MaterialResponse,
    MaterialListResponse,
)
from app.utils.list_view import ListViewState, list_view_params

router = APIRouter()


def material_list_view(
    state: ListViewState = Depends(list_view_params),
    manufacturer: Optional[str] = Query(None),
    unit: Optional[str] = Query(None),
) -> ListViewState:
    return state.with_filters(manufacturer=manufacturer, unit=unit)


@router.post("", response_model=MaterialResponse, status_code=status.HTTP_201_CREATED)
async def create_material(
    material_data: MaterialCreate,
    db: AsyncSession = Depends(get_db),
) -> MaterialResponse:
    """Create a new material."""
    controller = MaterialController(db)
    return await controller.create_material(material_data)


@router.get("", response_model=MaterialListResponse)
async def list_materials(
    state: ListViewState = Depends(material_list_view),
    db: AsyncSession = Depends(get_db),
) -> MaterialListResponse:
    """List materials with search, filters, sort and pagination."""
    controller = MaterialController(db)
    return await controller.list_materials(state)


@router.get("/export")
async def export_materials(
    fmt: str = Query("csv", alias="format"),
    state: ListViewState = Depends(material_list_view),
    db: AsyncSession = Depends(get_db),
):
    """Export the filtered material list as CSV or XLSX."""
    return await export_response(db, "materials", state, fmt)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_materials(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkDeleteResponse:
    """Delete several materials; referenced ones are reported, not deleted."""
    controller = MaterialController(db)
    return await controller.bulk_delete_materials(request.ids)


@router.get("/{material_id}", response_model=MaterialResponse)
async def get_material(
    material_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> MaterialResponse:
    """Get material by ID."""
    controller = MaterialController(db)
    material = await controller.get_material(material_id)
    if not material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Material not found",
        )
    return material


@router.put("/{material_id}", response_model=MaterialResponse)
async def update_material(
    material_id: UUID,
    material_data: MaterialUpdate,
    db: AsyncSession = Depends(get_db),
) -> MaterialResponse:
    """Update a material."""
    controller = MaterialController(db)
    material = await controller.update_material(material_id, material_data)
    if not material:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Material not found",
        )
    return material


@router.delete("/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_material(
    material_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a material not used by any assembly."""
    controller = MaterialController(db)
    deleted = await controller.delete_material(material_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Material not found",
        )
