"""
Shared file-download response for list exports.
"""

from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.export_controller import ExportController
from app.utils.list_view import ListViewState


async def export_response(db: AsyncSession, resource: str, state: ListViewState, fmt: str) -> StreamingResponse:
    """Stream the list view's rows as a CSV or XLSX attachment."""
    controller = ExportController(db)
    output, media_type, filename = await controller.export(resource, state, fmt)
    return StreamingResponse(
        output,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
