"""
Export controller.
"""

import io
from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.services.export_service import ExportService
from app.utils.list_view import ListViewState


class ExportController(BaseController):
    """Controller for list exports."""

    def __init__(self, session: AsyncSession):
        self.export_service = ExportService(session)

    async def export(self, resource: str, state: ListViewState, fmt: str) -> Tuple[io.BytesIO, str, str]:
        return await self.export_service.export(resource, state, fmt)
