"""
User service with business logic.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException, ValidationException
from app.core.logging import get_logger
from app.core.security import hash_password, is_password_too_long
from app.db.repositories.user_repository import UserRepository
from app.models.user import UserRole, UserStatus
from app.schemas.user import UserCreate, UserUpdate, UserResponse
from app.services.base_service import BaseService
from app.utils.list_view import ListViewState, parse_enum_filters

logger = get_logger(__name__)

FILTER_ENUMS = {"role": UserRole, "status": UserStatus}


class UserService(BaseService):
    """Service for user operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    def _hash(self, password: str) -> str:
        if is_password_too_long(password):
            raise ValidationException("Password is too long", "Passwords are limited to 72 bytes")
        return hash_password(password)

    async def _ensure_unique(self, email: Optional[str], employee_id: Optional[str], current_id: Optional[UUID] = None) -> None:
        if email:
            existing = await self.user_repo.get_by(email=email)
            if existing is not None and existing.id != current_id:
                raise ConflictException("Email already exists", f"A user with email '{email}' already exists")
        if employee_id:
            existing = await self.user_repo.get_by(employee_id=employee_id)
            if existing is not None and existing.id != current_id:
                raise ConflictException("Employee ID already exists", f"Employee ID '{employee_id}' is taken")

    async def create_user(self, user_data: UserCreate) -> UserResponse:
        """Create a user; the password is stored only as a bcrypt hash."""
        await self._ensure_unique(user_data.email, user_data.employee_id)
        user_dict = user_data.model_dump(exclude_unset=True, exclude={"password"})
        user_dict["password_hash"] = self._hash(user_data.password)
        user = await self.user_repo.create(**user_dict)
        await self.session.commit()
        logger.info("User created", extra={"user_id": str(user.id), "role": user.role.value})
        return UserResponse.model_validate(user)

    async def get_user(self, user_id: UUID) -> Optional[UserResponse]:
        user = await self.user_repo.get(user_id)
        if not user:
            return None
        return UserResponse.model_validate(user)

    async def list_users(self, state: ListViewState) -> Tuple[List[UserResponse], int]:
        """List users; role and status filters accept enum values."""
        users, total = await self.user_repo.list_view(parse_enum_filters(state, FILTER_ENUMS))
        return [UserResponse.model_validate(u) for u in users], total

    async def update_user(self, user_id: UUID, user_data: UserUpdate) -> Optional[UserResponse]:
        if not await self.user_repo.exists(user_id):
            return None

        update_dict = user_data.model_dump(exclude_unset=True, exclude={"password"})
        await self._ensure_unique(update_dict.get("email"), update_dict.get("employee_id"), user_id)
        if user_data.password:
            update_dict["password_hash"] = self._hash(user_data.password)
        updated = await self.user_repo.update(user_id, **update_dict)
        await self.session.commit()
        return UserResponse.model_validate(updated)

    async def delete_user(self, user_id: UUID) -> bool:
        """Delete a user who created no projects."""
        if not await self.user_repo.exists(user_id):
            return False

        projects = await self.user_repo.count_created_projects(user_id)
        if projects:
            raise ConflictException(
                "User has created projects",
                f"User is the creator of {projects} project(s)",
                {"projects": projects},
            )

        deleted = await self.user_repo.delete(user_id)
        await self.session.commit()
        return deleted

    async def bulk_delete_users(self, ids: List[UUID]):
        return await self.bulk_delete(ids, self.delete_user)
