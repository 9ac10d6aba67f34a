"""
Project repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.project import Project


class ProjectRepository(BaseRepository[Project]):
    """Repository for project operations."""

    search_fields = ("name", "description", "location", "project_type")
    sortable_fields = ("name", "status", "priority", "start_date", "end_date", "total_price", "created_at", "updated_at")

    def __init__(self, session: AsyncSession):
        super().__init__(Project, session)

    def load_options(self):
        return (
            selectinload(Project.client),
            selectinload(Project.creator),
            selectinload(Project.timeline),
            selectinload(Project.template),
        )
