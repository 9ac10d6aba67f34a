"""
User repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.base_repository import BaseRepository
from app.models.project import Project
from app.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for user operations."""

    search_fields = ("name", "email", "employee_id", "department", "position")
    sortable_fields = ("name", "email", "role", "status", "department", "hire_date", "created_at", "updated_at")

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def count_created_projects(self, user_id) -> int:
        return await self.count_where(Project.created_by, user_id)
