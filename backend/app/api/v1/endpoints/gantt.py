"""
Gantt chart endpoint.
"""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from app.db.session import get_db
from app.controllers.gantt_controller import GanttController
from app.schemas.gantt import GanttResponse
from app.services.gantt_service import GanttQuery

router = APIRouter()


@router.get("", response_model=GanttResponse)
async def get_gantt(
    view_start: Optional[date] = Query(None),
    view_end: Optional[date] = Query(None),
    zoom: float = Query(1.0, description="Clamped to 0.1-5.0"),
    auto_fit: bool = Query(False),
    search: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    task_type: Optional[str] = Query(None),
    priority: Optional[str] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    project_id: Optional[UUID] = Query(None),
    db: AsyncSession = Depends(get_db),
) -> GanttResponse:
    """Positioned tasks and milestones of every project timeline."""
    controller = GanttController(db)
    return await controller.get_chart(GanttQuery(
        view_start=view_start,
        view_end=view_end,
        zoom=zoom,
        auto_fit=auto_fit,
        search=search,
        status=status,
        task_type=task_type,
        priority=priority,
        date_from=date_from,
        date_to=date_to,
        project_id=project_id,
    ))
