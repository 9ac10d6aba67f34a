"""
Timeline, milestone and task Pydantic schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, Optional, List
from datetime import date, datetime
from uuid import UUID

from app.models.timeline import ScheduleStatus, TaskType, Priority


class TimelineBase(BaseModel):
    """Base timeline schema with common fields."""
    start_date: date
    end_date: Optional[date] = None
    working_days: Optional[Dict[str, bool]] = None
    holidays: List[date] = []
    progress: int = Field(0, ge=0, le=100)
    status: ScheduleStatus = ScheduleStatus.PLANNING


class TimelineCreate(TimelineBase):
    """Schema for creating a project timeline."""
    pass


class TimelineUpdate(BaseModel):
    """Schema for updating a timeline (all fields optional)."""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    working_days: Optional[Dict[str, bool]] = None
    holidays: Optional[List[date]] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[ScheduleStatus] = None


class MilestoneBase(BaseModel):
    """Base milestone schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: date
    status: ScheduleStatus = ScheduleStatus.PLANNING
    progress: int = Field(0, ge=0, le=100)
    depends_on: Optional[UUID] = None

    @field_validator("depends_on", mode="before")
    @classmethod
    def blank_dependency(cls, value):
        return value or None


class MilestoneCreate(MilestoneBase):
    """Schema for creating a milestone."""
    pass


class MilestoneUpdate(BaseModel):
    """Schema for updating a milestone (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    due_date: Optional[date] = None
    status: Optional[ScheduleStatus] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    depends_on: Optional[UUID] = None

    @field_validator("depends_on", mode="before")
    @classmethod
    def blank_dependency(cls, value):
        return value or None


class MilestoneResponse(MilestoneBase):
    """Schema for milestone response."""
    id: UUID
    timeline_id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MilestoneDeleteResponse(BaseModel):
    id: UUID
    tasks_removed: int


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    task_type: TaskType = TaskType.CONSTRUCTION
    milestone_id: Optional[UUID] = None
    planned_start: date
    planned_end: Optional[date] = None
    duration: int = Field(..., ge=1)
    progress: int = Field(0, ge=0, le=100)
    status: ScheduleStatus = ScheduleStatus.PLANNING
    priority: Priority = Priority.MEDIUM
    estimated_cost: Optional[float] = Field(None, ge=0)

    @field_validator("milestone_id", mode="before")
    @classmethod
    def blank_milestone(cls, value):
        # The task form posts "" for "no milestone"
        return value or None


class TaskCreate(TaskBase):
    """Schema for creating a task."""
    pass


class TaskUpdate(BaseModel):
    """Schema for updating a task (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    task_type: Optional[TaskType] = None
    milestone_id: Optional[UUID] = None
    planned_start: Optional[date] = None
    planned_end: Optional[date] = None
    duration: Optional[int] = Field(None, ge=1)
    progress: Optional[int] = Field(None, ge=0, le=100)
    status: Optional[ScheduleStatus] = None
    priority: Optional[Priority] = None
    estimated_cost: Optional[float] = Field(None, ge=0)

    @field_validator("milestone_id", mode="before")
    @classmethod
    def blank_milestone(cls, value):
        return value or None


class TaskResponse(TaskBase):
    """Schema for task response."""
    id: UUID
    timeline_id: UUID
    planned_end: date
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TimelineResponse(TimelineBase):
    """Schema for timeline response with milestones and tasks."""
    id: UUID
    project_id: UUID
    project_name: Optional[str] = None
    duration: Optional[int] = None
    working_days: Dict[str, bool] = {}
    derived_progress: int = 0
    milestones: List[MilestoneResponse] = []
    tasks: List[TaskResponse] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectTimelineResponse(BaseModel):
    """Timeline lookup for a project; exists is False when none was created yet."""
    exists: bool
    timeline: Optional[TimelineResponse] = None
    message: Optional[str] = None
