"""
User controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.common import BulkDeleteResponse
from app.schemas.user import UserCreate, UserUpdate, UserResponse, UserListResponse
from app.services.user_service import UserService
from app.utils.list_view import ListViewState


class UserController(BaseController):
    """Controller for user operations."""

    def __init__(self, session: AsyncSession):
        self.user_service = UserService(session)

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        return await self.user_service.create_user(user_data)

    async def get_user(self, user_id: UUID) -> Optional[UserResponse]:
        return await self.user_service.get_user(user_id)

    async def list_users(self, state: ListViewState) -> UserListResponse:
        users, total = await self.user_service.list_users(state)
        return UserListResponse(items=users, total=total, page=state.page, page_size=state.page_size)

    async def update_user(self, user_id: UUID, user_data: UserUpdate) -> Optional[UserResponse]:
        return await self.user_service.update_user(user_id, user_data)

    async def delete_user(self, user_id: UUID) -> bool:
        return await self.user_service.delete_user(user_id)

    async def bulk_delete_users(self, ids: List[UUID]) -> BulkDeleteResponse:
        return await self.user_service.bulk_delete_users(ids)
