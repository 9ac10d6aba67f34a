"""
Assembly Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from app.models.assembly import AssemblyModule


class AssemblyMaterialInput(BaseModel):
    """One bill-of-materials line on create/update."""
    material_id: UUID
    quantity: float = Field(..., gt=0)


class MaterialSummary(BaseModel):
    id: UUID
    name: str
    unit: str
    price: float

    class Config:
        from_attributes = True


class AssemblyMaterialResponse(BaseModel):
    """Bill-of-materials line with its material."""
    id: UUID
    material_id: UUID
    quantity: float
    material: Optional[MaterialSummary] = None

    class Config:
        from_attributes = True


class CategorySummary(BaseModel):
    id: UUID
    name: str

    class Config:
        from_attributes = True


class AssemblyBase(BaseModel):
    """Base assembly schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    part_number: Optional[str] = Field(None, max_length=100)
    manufacturer: Optional[str] = Field(None, max_length=255)
    unit: str = Field("EACH", min_length=1, max_length=50)
    price: float = Field(0, ge=0)
    module: AssemblyModule = AssemblyModule.ELECTRICAL
    category_id: UUID


class AssemblyCreate(AssemblyBase):
    """Schema for creating an assembly with its bill of materials."""
    materials: List[AssemblyMaterialInput] = []


class AssemblyUpdate(BaseModel):
    """Schema for updating an assembly; materials, when given, replace the list."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    part_number: Optional[str] = Field(None, max_length=100)
    manufacturer: Optional[str] = Field(None, max_length=255)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)
    price: Optional[float] = Field(None, ge=0)
    module: Optional[AssemblyModule] = None
    category_id: Optional[UUID] = None
    materials: Optional[List[AssemblyMaterialInput]] = None


class AssemblyResponse(AssemblyBase):
    """Schema for assembly response."""
    id: UUID
    category: Optional[CategorySummary] = None
    materials: List[AssemblyMaterialResponse] = []
    material_cost: float = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssemblyListResponse(BaseModel):
    """Schema for assembly list response."""
    items: List[AssemblyResponse]
    total: int
    page: int
    page_size: int
