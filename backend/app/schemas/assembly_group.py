"""
Assembly group Pydantic schemas: group CRUD, item quantity and selection validation.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, Optional, List
from datetime import datetime
from uuid import UUID

from app.models.assembly_group import GroupType


class AssemblyGroupItemInput(BaseModel):
    """One group item on create/update."""
    assembly_id: UUID
    quantity: int = Field(1, ge=1)
    conflicts_with: List[UUID] = []
    is_default: bool = False
    sort_order: int = 0


class GroupAssemblySummary(BaseModel):
    id: UUID
    name: str
    price: float
    unit_cost: float

    class Config:
        from_attributes = True


class AssemblyGroupItemResponse(BaseModel):
    """Group item with its assembly."""
    id: UUID
    assembly_id: UUID
    quantity: int
    conflicts_with: List[UUID] = []
    is_default: bool
    sort_order: int
    assembly: Optional[GroupAssemblySummary] = None

    class Config:
        from_attributes = True


class AssemblyGroupBase(BaseModel):
    """Base group schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    group_type: GroupType
    sort_order: int = 0


class AssemblyGroupCreate(AssemblyGroupBase):
    """Schema for creating a group with its items."""
    category_id: UUID
    items: List[AssemblyGroupItemInput] = []


class AssemblyGroupUpdate(BaseModel):
    """Schema for updating a group; items, when given, replace the item set."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    group_type: Optional[GroupType] = None
    sort_order: Optional[int] = None
    items: Optional[List[AssemblyGroupItemInput]] = None


class AssemblyGroupResponse(AssemblyGroupBase):
    """Schema for group response."""
    id: UUID
    category_id: UUID
    category_name: Optional[str] = None
    items: List[AssemblyGroupItemResponse] = []
    # Initial UI selection seeded from is_default items
    default_selection: List[UUID] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssemblyGroupListResponse(BaseModel):
    """Schema for group list response."""
    items: List[AssemblyGroupResponse]
    total: int


class AssemblyGroupDeleteResponse(BaseModel):
    id: UUID
    items_removed: int


class ItemQuantityUpdate(BaseModel):
    """New quantity for one group item."""
    quantity: int


class SelectionValidationRequest(BaseModel):
    """Chosen assemblies keyed by category id then group id."""
    selections: Dict[UUID, Dict[UUID, List[UUID]]]


class SelectionError(BaseModel):
    type: str
    group_id: Optional[UUID] = None
    message: str
    details: Dict[str, Any] = {}


class AssemblyCost(BaseModel):
    assembly_id: UUID
    name: str
    quantity: int
    unit_cost: float
    cost: float


class GroupCost(BaseModel):
    group_id: UUID
    group_name: str
    cost: float = 0
    assemblies: List[AssemblyCost] = []


class CategoryCost(BaseModel):
    category_id: UUID
    category_name: str
    cost: float = 0
    groups: List[GroupCost] = []


class SelectionValidationResult(BaseModel):
    """Validation outcome and cost breakdown of a selection."""
    is_valid: bool
    errors: List[SelectionError] = []
    warnings: List[str] = []
    total_cost: float = 0
    breakdown: List[CategoryCost] = []
