"""
Project Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from app.models.project import ProjectStatus
from app.models.timeline import Priority


class ProjectBase(BaseModel):
    """Base project schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    client_id: Optional[UUID] = None
    created_by: Optional[UUID] = None
    from_template_id: Optional[UUID] = None
    project_type: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=500)
    area: Optional[float] = Field(None, ge=0)
    budget: Optional[float] = Field(None, ge=0)
    total_price: float = Field(0, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.PLANNING
    progress: int = Field(0, ge=0, le=100)
    priority: Priority = Priority.MEDIUM


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""
    pass


class ProjectUpdate(BaseModel):
    """Schema for updating a project (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    client_id: Optional[UUID] = None
    created_by: Optional[UUID] = None
    from_template_id: Optional[UUID] = None
    project_type: Optional[str] = Field(None, max_length=100)
    location: Optional[str] = Field(None, max_length=500)
    area: Optional[float] = Field(None, ge=0)
    budget: Optional[float] = Field(None, ge=0)
    total_price: Optional[float] = Field(None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[ProjectStatus] = None
    progress: Optional[int] = Field(None, ge=0, le=100)
    priority: Optional[Priority] = None


class ProjectResponse(ProjectBase):
    """Schema for project response."""
    id: UUID
    client_name: Optional[str] = None
    creator_name: Optional[str] = None
    template_name: Optional[str] = None
    has_timeline: bool = False
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    """Schema for project list response."""
    items: List[ProjectResponse]
    total: int
    page: int
    page_size: int
