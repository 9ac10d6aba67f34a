"""
Client repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.repositories.base_repository import BaseRepository
from app.models.client import Client
from app.models.project import Project


class ClientRepository(BaseRepository[Client]):
    """Repository for client operations."""

    search_fields = ("company_name", "contact_person", "contact_email", "city")
    sortable_fields = (
        "contact_person",
        "company_name",
        "city",
        "province",
        "status",
        "client_type",
        "category",
        "created_at",
        "updated_at",
    )

    def __init__(self, session: AsyncSession):
        super().__init__(Client, session)

    def load_options(self):
        return (selectinload(Client.projects),)

    async def count_projects(self, client_id) -> int:
        return await self.count_where(Project.client_id, client_id)
