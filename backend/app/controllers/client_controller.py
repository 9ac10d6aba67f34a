"""
Client controller.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.schemas.client import ClientCreate, ClientUpdate, ClientResponse, ClientListResponse
from app.schemas.common import BulkDeleteResponse
from app.services.client_service import ClientService
from app.utils.list_view import ListViewState


class ClientController(BaseController):
    """Controller for client operations."""

    def __init__(self, session: AsyncSession):
        self.client_service = ClientService(session)

    async def create_client(self, client_data: ClientCreate) -> ClientResponse:
        return await self.client_service.create_client(client_data)

    async def get_client(self, client_id: UUID) -> Optional[ClientResponse]:
        return await self.client_service.get_client(client_id)

    async def list_clients(self, state: ListViewState) -> ClientListResponse:
        clients, total = await self.client_service.list_clients(state)
        return ClientListResponse(items=clients, total=total, page=state.page, page_size=state.page_size)

    async def update_client(self, client_id: UUID, client_data: ClientUpdate) -> Optional[ClientResponse]:
        return await self.client_service.update_client(client_id, client_data)

    async def delete_client(self, client_id: UUID) -> bool:
        return await self.client_service.delete_client(client_id)

    async def bulk_delete_clients(self, ids: List[UUID]) -> BulkDeleteResponse:
        return await self.client_service.bulk_delete_clients(ids)
