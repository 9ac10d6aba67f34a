"""
Template Pydantic schemas: template CRUD and the bill of quantities.
"""

from pydantic import BaseModel, Field
from typing import Dict, Optional, List
from datetime import datetime
from uuid import UUID

from app.models.assembly import AssemblyModule

# {category_id: {group_id: [assembly_id, ...]}}
Selections = Dict[UUID, Dict[UUID, List[UUID]]]


class TemplateAssemblyInput(BaseModel):
    """One assembly line on create/update."""
    assembly_id: UUID
    quantity: float = Field(1, gt=0)


class TemplateAssemblySummary(BaseModel):
    id: UUID
    name: str
    module: AssemblyModule
    unit: str
    unit_cost: float

    class Config:
        from_attributes = True


class TemplateAssemblyResponse(BaseModel):
    """Template line with its assembly."""
    id: UUID
    assembly_id: UUID
    quantity: float
    sort_order: int
    assembly: Optional[TemplateAssemblySummary] = None

    class Config:
        from_attributes = True


class TemplateBase(BaseModel):
    """Base template schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)


class TemplateCreate(TemplateBase):
    """Schema for creating a template with its assembly lines."""
    assemblies: List[TemplateAssemblyInput] = []
    assembly_selections: Optional[Selections] = None


class TemplateUpdate(BaseModel):
    """Schema for updating a template; assemblies, when given, replace the lines."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    assemblies: Optional[List[TemplateAssemblyInput]] = None
    assembly_selections: Optional[Selections] = None


class TemplateResponse(TemplateBase):
    """Schema for template response."""
    id: UUID
    assemblies: List[TemplateAssemblyResponse] = []
    assembly_selections: Optional[Selections] = None
    total_cost: float = 0
    project_count: int = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TemplateListResponse(BaseModel):
    """Schema for template list response."""
    items: List[TemplateResponse]
    total: int
    page: int
    page_size: Optional[int]


class BoqMaterialLine(BaseModel):
    no: str
    material_id: UUID
    name: str
    manufacturer: Optional[str] = None
    part_number: Optional[str] = None
    unit: str
    quantity: float
    unit_price: float
    total_price: float


class BoqAssemblyLine(BaseModel):
    no: str
    assembly_id: UUID
    name: str
    unit: str
    quantity: float
    unit_price: float
    total_price: float
    materials: List[BoqMaterialLine] = []


class BoqModule(BaseModel):
    no: str
    module: AssemblyModule
    assemblies: List[BoqAssemblyLine] = []
    total_price: float = 0


class ConsolidatedMaterial(BaseModel):
    """One material summed over every assembly that uses it."""
    material_id: UUID
    name: str
    manufacturer: Optional[str] = None
    part_number: Optional[str] = None
    unit: str
    unit_price: float
    total_quantity: float = 0
    total_cost: float = 0


class BoqSummary(BaseModel):
    modules: List[BoqModule] = []
    materials: List[ConsolidatedMaterial] = []
    total_assemblies: int = 0
    total_materials: int = 0
    total_cost: float = 0


class BoqResponse(BoqSummary):
    """Bill of quantities of a template, or of the template a project was created from."""
    template_id: UUID
    template_name: str
    project_id: Optional[UUID] = None
    project_name: Optional[str] = None
