"""
Gantt chart geometry.

Positions are percentages of the view window; the window is measured in
days. Zoom narrows bars and densifies the time axis.
"""

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Tuple

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
# Pixels per time-axis label at zoom 1
LABEL_WIDTH = 80
# Pixels the auto-fit zoom targets
FIT_WIDTH = 1200
MIN_CHART_WIDTH = 800
MIN_BAR_WIDTH = 2.0
MAX_BAR_WIDTH = 95.0


@dataclass(frozen=True)
class TimeLabel:
    date: date
    label: str


def clamp_zoom(zoom: float) -> float:
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


def _window_days(view_start: date, view_end: date) -> int:
    total = (view_end - view_start).days
    if total <= 0:
        raise ValueError("View end must be after view start")
    return total


def task_position(
    task_start: date,
    task_end: date,
    view_start: date,
    view_end: date,
    zoom: float = 1.0,
) -> Tuple[float, float]:
    """
    Bar geometry of a task.

    Returns:
        (left %, width %); left is never negative and width stays within [2, 95]
    """
    total = _window_days(view_start, view_end)
    zoom = clamp_zoom(zoom)

    left = (task_start - view_start).days / total * 100
    # Higher zoom gives narrower bars
    adjustment = max(0.3, 1 / zoom)
    width = min((task_end - task_start).days / total * 100 * adjustment, MAX_BAR_WIDTH)
    return max(0.0, left), max(MIN_BAR_WIDTH, width)


def milestone_position(due_date: date, view_start: date, view_end: date) -> float:
    """Left % of a milestone marker; not clamped, so it may fall outside the window."""
    total = _window_days(view_start, view_end)
    return (due_date - view_start).days / total * 100


def label_step(zoom: float) -> str:
    """Axis step for a zoom level: day, 3 days, week or month."""
    if zoom >= 2:
        return "day"
    if zoom >= 1.5:
        return "3days"
    if zoom >= 1:
        return "week"
    return "month"


def _add_months(value: date, months: int) -> date:
    """Same day of month `months` later, clamped to the target month's length."""
    year, month = divmod(value.month - 1 + months, 12)
    year += value.year
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _format_label(value: date, zoom: float) -> str:
    if zoom >= 1.5:
        return value.strftime("%d %b %y")
    if zoom >= 1:
        return value.strftime("%d %b")
    return value.strftime("%d %B")


def time_labels(view_start: date, view_end: date, zoom: float = 1.0) -> List[TimeLabel]:
    """Axis labels from view_start while the cursor is on or before view_end."""
    zoom = clamp_zoom(zoom)
    step = label_step(zoom)
    labels = []
    current = view_start
    steps = 0
    while current <= view_end:
        labels.append(TimeLabel(date=current, label=_format_label(current, zoom)))
        if step == "day":
            current += timedelta(days=1)
        elif step == "3days":
            current += timedelta(days=3)
        elif step == "week":
            current += timedelta(days=7)
        else:
            # Month labels are offsets from view_start
            steps += 1
            current = _add_months(view_start, steps)
    return labels


def auto_fit_zoom(view_start: date, view_end: date) -> float:
    """Zoom at which the whole window fits the target chart width."""
    total_days = _window_days(view_start, view_end)
    return clamp_zoom(FIT_WIDTH / (total_days * LABEL_WIDTH))


def chart_width(label_count: int, zoom: float) -> float:
    """Chart width in pixels for the given number of axis labels."""
    return max(MIN_CHART_WIDTH, label_count * LABEL_WIDTH * clamp_zoom(zoom))
