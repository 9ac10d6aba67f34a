"""
User API endpoints.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.api.v1.exports import export_response
from app.db.session import get_db
from app.controllers.user_controller import UserController
from app.schemas.common import BulkDeleteRequest, BulkDeleteResponse
from app.schemas.user import (
    UserCreate,
    UserUpdate,
    UserResponse,
    UserListResponse,
)
from app.utils.list_view import ListViewState, list_view_params

router = APIRouter()


def user_list_view(
    state: ListViewState = Depends(list_view_params),
    role: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    department: Optional[str] = Query(None),
) -> ListViewState:
    return state.with_filters(role=role, status=status, department=department)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Create a new user."""
    controller = UserController(db)
    return await controller.create_user(user_data)


@router.get("", response_model=UserListResponse)
async def list_users(
    state: ListViewState = Depends(user_list_view),
    db: AsyncSession = Depends(get_db),
) -> UserListResponse:
    """List users with search, filters, sort and pagination."""
    controller = UserController(db)
    return await controller.list_users(state)


@router.get("/export")
async def export_users(
    fmt: str = Query("csv", alias="format"),
    state: ListViewState = Depends(user_list_view),
    db: AsyncSession = Depends(get_db),
):
    """Export the filtered user list as CSV or XLSX."""
    return await export_response(db, "users", state, fmt)


@router.post("/bulk-delete", response_model=BulkDeleteResponse)
async def bulk_delete_users(
    request: BulkDeleteRequest,
    db: AsyncSession = Depends(get_db),
) -> BulkDeleteResponse:
    """Delete several users; project creators are reported, not deleted."""
    controller = UserController(db)
    return await controller.bulk_delete_users(request.ids)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Get user by ID."""
    controller = UserController(db)
    user = await controller.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Update a user."""
    controller = UserController(db)
    user = await controller.update_user(user_id, user_data)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Delete a user who created no projects."""
    controller = UserController(db)
    deleted = await controller.delete_user(user_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
