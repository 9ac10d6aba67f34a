"""
Assembly category Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class AssemblyCategoryBase(BaseModel):
    """Base category schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=100)


class AssemblyCategoryCreate(AssemblyCategoryBase):
    """Schema for creating a category."""
    pass


class AssemblyCategoryUpdate(BaseModel):
    """Schema for updating a category (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    color: Optional[str] = Field(None, max_length=20)
    icon: Optional[str] = Field(None, max_length=100)


class AssemblyCategoryResponse(AssemblyCategoryBase):
    """Schema for category response."""
    id: UUID
    assembly_count: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssemblyCategoryListResponse(BaseModel):
    """Schema for category list response."""
    items: List[AssemblyCategoryResponse]
    total: int
    page: int
    page_size: int
