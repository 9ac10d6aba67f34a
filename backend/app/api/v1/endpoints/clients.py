"""
Client API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.exports import export_response
from app.db.session import get_db
from app.controllers.client_controller import ClientController
from app.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
)
from app.schemas.common import BulkDeleteRequest, BulkDeleteResponse
from app.utils.list_view import ListViewState, list_view_params

router = APIRouter()


def client_list_view(
    state: ListViewState = Depends(list_view_params),
    status: Optional[str] = Query(None),
    client_type: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    province: Optional[str] = Query(None),
) -> ListViewState:
    return state.with_filters(
        status=status,
        client_type=client_type,
        category=category,
        city=city,
        province=province,
    )


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Create a new client."""
    controller = ClientController(db)
    return await controller.create_client(client_data)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    state: ListViewState = Depends(client_list_view),
    db: AsyncSession = Depends(get_db),
) -> ClientListResponse:
    """List clients with search, filters, sort and pagination."""
    controller = ClientController(db)
    return await controller.list_clients(state)


@router.get("/export")
async def export_clients(
    fmt: str = Query("csv", alias="format"),
    state: ListViewState = Depends(client_list_view),
    db: AsyncSession = Depends(get_db),
):
    """Export the filtered client list as CSV or XLSX."""
    return await export_response(db, "clients", state, fmt)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_clients(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkDeleteResponse:
    """Delete several clients; ones with projects are reported, not deleted."""
    controller = ClientController(db)
    return await controller.bulk_delete_clients(request.ids)


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Get client by ID."""
    controller = ClientController(db)
    client = await controller.get_client(client_id)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )
    return client


@router.put("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: UUID,
    client_data: ClientUpdate,
    db: AsyncSession = Depends(get_db),
) -> ClientResponse:
    """Update a client."""
    controller = ClientController(db)
    client = await controller.update_client(client_id, client_data)
    if not client:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )
    return client


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a client without projects."""
    controller = ClientController(db)
    deleted = await controller.delete_client(client_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found",
        )
