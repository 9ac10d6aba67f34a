"""
Client service with business logic.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException
from app.db.repositories.client_repository import ClientRepository
from app.models.client import Client, ClientType, ClientCategory, ClientStatus
from app.models.project import ProjectStatus, ACTIVE_PROJECT_STATUSES, CLOSED_PROJECT_STATUSES
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse
from app.services.base_service import BaseService
from app.utils.list_view import ListViewState, parse_enum_filters

FILTER_ENUMS = {
    "status": ClientStatus,
    "client_type": ClientType,
    "category": ClientCategory,
}


class ClientService(BaseService):
    """Service for client operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.client_repo = ClientRepository(session)

    def _to_response(self, client: Client) -> ClientResponse:
        """Build the response with project aggregates derived from the client's projects."""
        response = ClientResponse.model_validate(client)
        projects = client.projects
        response.total_projects = len(projects)
        response.active_projects = sum(1 for p in projects if p.status in ACTIVE_PROJECT_STATUSES)
        response.completed_projects = sum(1 for p in projects if p.status == ProjectStatus.COMPLETED)
        response.total_contract_value = sum(p.total_price or 0 for p in projects)
        response.outstanding_balance = sum(
            p.total_price or 0 for p in projects if p.status not in CLOSED_PROJECT_STATUSES
        )
        return response

    async def _ensure_email_free(self, email: str, current_id: Optional[UUID] = None) -> None:
        existing = await self.client_repo.get_by(contact_email=email)
        if existing is not None and existing.id != current_id:
            raise ConflictException("Contact email already exists", f"A client with email '{email}' already exists")

    async def create_client(self, client_data: ClientCreate) -> ClientResponse:
        await self._ensure_email_free(client_data.contact_email)
        client = await self.client_repo.create(**client_data.model_dump(exclude_unset=True))
        await self.session.commit()
        client = await self.client_repo.get(client.id)
        return self._to_response(client)

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        client = await self.client_repo.get(client_id)
        if not client:
            return None
        return self._to_response(client)

    async def list_clients(self, state: ListViewState) -> Tuple[List[ClientResponse], int]:
        """List clients; status, client_type and category filters accept enum values."""
        clients, total = await self.client_repo.list_view(parse_enum_filters(state, FILTER_ENUMS))
        return [self._to_response(c) for c in clients], total

    async def update_client(self, client_id: UUID, client_data: ClientUpdate) -> Optional[ClientResponse]:
        if not await self.client_repo.exists(client_id):
            return None

        update_dict = client_data.model_dump(exclude_unset=True)
        if update_dict.get("contact_email"):
            await self._ensure_email_free(update_dict["contact_email"], client_id)
        updated = await self.client_repo.update(client_id, **update_dict)
        await self.session.commit()
        return self._to_response(updated)

    async def delete_client(self, client_id: UUID) -> bool:
        """Delete a client without projects."""
        if not await self.client_repo.exists(client_id):
            return False

        projects = await self.client_repo.count_projects(client_id)
        if projects:
            raise ConflictException(
                "Client has projects",
                f"Client is referenced by {projects} project(s)",
                {"projects": projects},
            )

        deleted = await self.client_repo.delete(client_id)
        await self.session.commit()
        return deleted

    async def bulk_delete_clients(self, ids: List[UUID]):
        return await self.bulk_delete(ids, self.delete_client)
