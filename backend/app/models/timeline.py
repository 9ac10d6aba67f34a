"""
Project timeline models: the timeline itself, its milestones and its tasks.
"""

from sqlalchemy import Column, String, Float, Integer, Date, JSON, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin


class ScheduleStatus(str, enum.Enum):
    """Status shared by timelines, milestones and tasks."""
    PLANNING = "PLANNING"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TaskType(str, enum.Enum):
    """Trade a task belongs to."""
    CONSTRUCTION = "CONSTRUCTION"
    ELECTRICAL = "ELECTRICAL"
    PLUMBING = "PLUMBING"
    MECHANICAL = "MECHANICAL"
    DESIGN = "DESIGN"
    PERMIT = "PERMIT"
    SUPERVISION = "SUPERVISION"
    OTHER = "OTHER"


class Priority(str, enum.Enum):
    """Priority enumeration."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


def default_working_days() -> dict:
    return {
        "monday": True,
        "tuesday": True,
        "wednesday": True,
        "thursday": True,
        "friday": True,
        "saturday": False,
        "sunday": False,
    }


class Timeline(TimestampMixin, Base):
    """Schedule of one project."""

    __tablename__ = "timelines"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    project_id = Column(UUID(as_uuid=True), ForeignKey("projects.id"), nullable=False, unique=True, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    duration = Column(Integer, nullable=True)
    working_days = Column(JSON, nullable=False, default=default_working_days)
    # ISO dates
    holidays = Column(JSON, nullable=False, default=list)
    progress = Column(Integer, nullable=False, default=0)
    status = Column(SQLEnum(ScheduleStatus), nullable=False, default=ScheduleStatus.PLANNING)

    # Relationships
    project = relationship("Project", back_populates="timeline")
    milestones = relationship(
        "Milestone",
        back_populates="timeline",
        cascade="all, delete-orphan",
        order_by="Milestone.due_date",
    )
    tasks = relationship(
        "Task",
        back_populates="timeline",
        cascade="all, delete-orphan",
        order_by="Task.planned_start",
    )

    @property
    def derived_progress(self) -> int:
        """Mean progress of the timeline's tasks; requires tasks to be loaded."""
        if not self.tasks:
            return 0
        return round(sum(task.progress or 0 for task in self.tasks) / len(self.tasks))


class Milestone(TimestampMixin, Base):
    """Dated checkpoint on a timeline."""

    __tablename__ = "milestones"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    timeline_id = Column(UUID(as_uuid=True), ForeignKey("timelines.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)
    due_date = Column(Date, nullable=False)
    status = Column(SQLEnum(ScheduleStatus), nullable=False, default=ScheduleStatus.PLANNING)
    progress = Column(Integer, nullable=False, default=0)
    depends_on = Column(UUID(as_uuid=True), ForeignKey("milestones.id"), nullable=True)

    # Relationships
    timeline = relationship("Timeline", back_populates="milestones")
    tasks = relationship("Task", back_populates="milestone")


class Task(TimestampMixin, Base):
    """Unit of scheduled work on a timeline."""

    __tablename__ = "tasks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    timeline_id = Column(UUID(as_uuid=True), ForeignKey("timelines.id", ondelete="CASCADE"), nullable=False, index=True)
    milestone_id = Column(UUID(as_uuid=True), ForeignKey("milestones.id", ondelete="CASCADE"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(String(2000), nullable=True)
    task_type = Column(SQLEnum(TaskType), nullable=False, default=TaskType.CONSTRUCTION)
    planned_start = Column(Date, nullable=False)
    planned_end = Column(Date, nullable=False)
    duration = Column(Integer, nullable=False)
    progress = Column(Integer, nullable=False, default=0)
    status = Column(SQLEnum(ScheduleStatus), nullable=False, default=ScheduleStatus.PLANNING)
    priority = Column(SQLEnum(Priority), nullable=False, default=Priority.MEDIUM)
    estimated_cost = Column(Float, nullable=True)

    # Relationships
    timeline = relationship("Timeline", back_populates="tasks")
    milestone = relationship("Milestone", back_populates="tasks")
