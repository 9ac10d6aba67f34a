"""
Material Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID


class MaterialBase(BaseModel):
    """Base material schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    part_number: Optional[str] = Field(None, max_length=100)
    manufacturer: Optional[str] = Field(None, max_length=255)
    unit: str = Field(..., min_length=1, max_length=50)
    price: float = Field(0, ge=0)
    purchase_url: Optional[str] = Field(None, max_length=1000)
    datasheet_file: Optional[str] = Field(None, max_length=1000)


class MaterialCreate(MaterialBase):
    """Schema for creating a material."""
    pass


class MaterialUpdate(BaseModel):
    """Schema for updating a material (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    part_number: Optional[str] = Field(None, max_length=100)
    manufacturer: Optional[str] = Field(None, max_length=255)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    purchase_url: Optional[str] = Field(None, max_length=1000)
    datasheet_file: Optional[str] = Field(None, max_length=1000)


class MaterialResponse(MaterialBase):
    """Schema for material response."""
    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class MaterialListResponse(BaseModel):
    """Schema for material list response."""
    items: List[MaterialResponse]
    total: int
    page: int
    page_size: int
