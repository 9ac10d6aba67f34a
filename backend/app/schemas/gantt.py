"""
Gantt chart response schemas.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import date
from uuid import UUID


class GanttTimeLabel(BaseModel):
    date: date
    label: str
    left: float


class GanttItem(BaseModel):
    """A task bar or milestone marker positioned on the chart."""
    id: UUID
    type: str
    name: str
    project_id: UUID
    project_name: str
    timeline_id: UUID
    milestone_id: Optional[UUID] = None
    start: date
    end: date
    status: str
    progress: int
    task_type: Optional[str] = None
    priority: Optional[str] = None
    left: float
    width: float


class GanttResponse(BaseModel):
    """Positioned chart for every matching timeline."""
    view_start: date
    view_end: date
    zoom: float
    chart_width: float
    labels: List[GanttTimeLabel] = []
    items: List[GanttItem] = []
    project_count: int = 0
