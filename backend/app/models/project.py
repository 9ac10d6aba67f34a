"""
Project model: a construction job for a client, optionally scheduled by a timeline.
"""

from sqlalchemy import Column, String, Float, Integer, Date, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin
from app.models.timeline import Priority


class ProjectStatus(str, enum.Enum):
    """Project status enumeration."""
    PLANNING = "PLANNING"
    APPROVED = "APPROVED"
    IN_PROGRESS = "IN_PROGRESS"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


# Statuses counted as a client's active work
ACTIVE_PROJECT_STATUSES = (ProjectStatus.APPROVED, ProjectStatus.IN_PROGRESS)
# Statuses whose contract value is no longer outstanding
CLOSED_PROJECT_STATUSES = (ProjectStatus.COMPLETED, ProjectStatus.CANCELLED)


class Project(TimestampMixin, Base):
    """Project model."""

    __tablename__ = "projects"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(2000), nullable=True)
    client_id = Column(UUID(as_uuid=True), ForeignKey("clients.id"), nullable=True, index=True)
    created_by = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True)
    project_type = Column(String(100), nullable=True)
    location = Column(String(500), nullable=True)
    area = Column(Float, nullable=True)
    budget = Column(Float, nullable=True)
    total_price = Column(Float, nullable=False, default=0)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    status = Column(SQLEnum(ProjectStatus), nullable=False, default=ProjectStatus.PLANNING, index=True)
    progress = Column(Integer, nullable=False, default=0)
    priority = Column(SQLEnum(Priority), nullable=False, default=Priority.MEDIUM)
    from_template_id = Column(UUID(as_uuid=True), ForeignKey("templates.id"), nullable=True, index=True)

    # Relationships
    client = relationship("Client", back_populates="projects")
    creator = relationship("User", back_populates="created_projects")
    timeline = relationship("Timeline", back_populates="project", uselist=False)
    template = relationship("Template", back_populates="projects")
