"""
Gantt service: positions every project's tasks and milestones on one chart.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ValidationException
from app.db.repositories.timeline_repository import TimelineRepository
from app.models.timeline import Timeline
from app.schemas.gantt import GanttItem, GanttResponse, GanttTimeLabel
from app.services import gantt_calculator
from app.services.base_service import BaseService
from app.utils.list_view import ALL


@dataclass(frozen=True)
class GanttQuery:
    """Window, zoom and filters of one chart request."""

    view_start: Optional[date] = None
    view_end: Optional[date] = None
    zoom: float = 1.0
    auto_fit: bool = False
    search: Optional[str] = None
    status: Optional[str] = None
    task_type: Optional[str] = None
    priority: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    project_id: Optional[UUID] = None


def _active(value: Optional[str]) -> Optional[str]:
    if value is None or value == "" or value == ALL:
        return None
    return value.upper()


def default_window(timelines: List[Timeline], buffer_days: int, today: Optional[date] = None) -> Tuple[date, date]:
    """Earliest timeline start to latest task end, padded by buffer days on both sides."""
    buffer = timedelta(days=buffer_days)
    if not timelines:
        today = today or date.today()
        return today - buffer, today + buffer

    earliest = min(t.start_date for t in timelines)
    ends = [task.planned_end for t in timelines for task in t.tasks]
    if not ends:
        ends = [t.end_date or t.start_date for t in timelines]
    return earliest - buffer, max(ends) + buffer


class GanttService(BaseService):
    """Service aggregating timelines into a positioned Gantt chart."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.timeline_repo = TimelineRepository(session)

    @staticmethod
    def _matches(query: GanttQuery, item: GanttItem) -> bool:
        if query.search:
            text = query.search.strip().lower()
            if text and text not in item.name.lower() and text not in item.project_name.lower():
                return False

        status = _active(query.status)
        if status and item.status != status:
            return False

        # Type and priority narrow tasks only; milestones stay visible
        if item.type == "task":
            task_type = _active(query.task_type)
            if task_type and item.task_type != task_type:
                return False
            priority = _active(query.priority)
            if priority and item.priority != priority:
                return False

        if query.date_from and item.start < query.date_from:
            return False
        if query.date_to and item.start > query.date_to:
            return False
        return True

    async def get_chart(self, query: GanttQuery) -> GanttResponse:
        """Build the chart for every timeline matching the query."""
        timelines = await self.timeline_repo.list_all(query.project_id)

        view_start, view_end = default_window(timelines, settings.GANTT_BUFFER_DAYS)
        view_start = query.view_start or view_start
        view_end = query.view_end or view_end
        if view_end <= view_start:
            raise ValidationException("view_end must be after view_start")

        if query.auto_fit:
            zoom = gantt_calculator.auto_fit_zoom(view_start, view_end)
        else:
            zoom = gantt_calculator.clamp_zoom(query.zoom)

        items: List[GanttItem] = []
        for timeline in timelines:
            project = timeline.project
            for milestone in timeline.milestones:
                items.append(GanttItem(
                    id=milestone.id,
                    type="milestone",
                    name=milestone.name,
                    project_id=project.id,
                    project_name=project.name,
                    timeline_id=timeline.id,
                    start=milestone.due_date,
                    end=milestone.due_date,
                    status=milestone.status.value,
                    progress=milestone.progress,
                    left=gantt_calculator.milestone_position(milestone.due_date, view_start, view_end),
                    width=0,
                ))
            for task in timeline.tasks:
                left, width = gantt_calculator.task_position(
                    task.planned_start, task.planned_end, view_start, view_end, zoom
                )
                items.append(GanttItem(
                    id=task.id,
                    type="task",
                    name=task.name,
                    project_id=project.id,
                    project_name=project.name,
                    timeline_id=timeline.id,
                    milestone_id=task.milestone_id,
                    start=task.planned_start,
                    end=task.planned_end,
                    status=task.status.value,
                    progress=task.progress,
                    task_type=task.task_type.value,
                    priority=task.priority.value,
                    left=left,
                    width=width,
                ))

        items = [item for item in items if self._matches(query, item)]
        items.sort(key=lambda item: (
            item.project_name,
            str(item.project_id),
            0 if item.type == "milestone" else 1,
            item.start,
        ))

        labels = [
            GanttTimeLabel(
                date=label.date,
                label=label.label,
                left=gantt_calculator.milestone_position(label.date, view_start, view_end),
            )
            for label in gantt_calculator.time_labels(view_start, view_end, zoom)
        ]

        return GanttResponse(
            view_start=view_start,
            view_end=view_end,
            zoom=zoom,
            chart_width=gantt_calculator.chart_width(len(labels), zoom),
            labels=labels,
            items=items,
            project_count=len({item.project_id for item in items}),
        )
