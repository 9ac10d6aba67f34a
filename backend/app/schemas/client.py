"""
Client Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, EmailStr
from typing import Optional, List
from datetime import datetime
from uuid import UUID

from app.models.client import ClientType, ClientCategory, ClientStatus


class ClientBase(BaseModel):
    """Base client schema with common fields."""
    client_type: ClientType = ClientType.INDIVIDUAL
    category: ClientCategory = ClientCategory.RESIDENTIAL
    status: ClientStatus = ClientStatus.ACTIVE
    company_name: Optional[str] = Field(None, max_length=255)
    business_license: Optional[str] = Field(None, max_length=100)
    tax_id: Optional[str] = Field(None, max_length=100)
    contact_person: str = Field(..., min_length=1, max_length=255)
    contact_position: Optional[str] = Field(None, max_length=255)
    contact_email: EmailStr
    contact_phone: str = Field(..., min_length=1, max_length=50)
    alternate_phone: Optional[str] = Field(None, max_length=50)
    address: str = Field(..., min_length=1, max_length=500)
    city: str = Field(..., min_length=1, max_length=100)
    province: str = Field(..., min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    country: str = Field("Indonesia", max_length=100)
    annual_revenue: Optional[float] = Field(None, ge=0)
    credit_limit: Optional[float] = Field(None, ge=0)
    payment_terms: int = Field(30, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)


class ClientCreate(ClientBase):
    """Schema for creating a client."""
    pass


class ClientUpdate(BaseModel):
    """Schema for updating a client (all fields optional)."""
    client_type: Optional[ClientType] = None
    category: Optional[ClientCategory] = None
    status: Optional[ClientStatus] = None
    company_name: Optional[str] = Field(None, max_length=255)
    business_license: Optional[str] = Field(None, max_length=100)
    tax_id: Optional[str] = Field(None, max_length=100)
    contact_person: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_position: Optional[str] = Field(None, max_length=255)
    contact_email: Optional[EmailStr] = None
    contact_phone: Optional[str] = Field(None, min_length=1, max_length=50)
    alternate_phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, min_length=1, max_length=500)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    province: Optional[str] = Field(None, min_length=1, max_length=100)
    postal_code: Optional[str] = Field(None, max_length=20)
    country: Optional[str] = Field(None, max_length=100)
    annual_revenue: Optional[float] = Field(None, ge=0)
    credit_limit: Optional[float] = Field(None, ge=0)
    payment_terms: Optional[int] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)


class ClientResponse(ClientBase):
    """Schema for client response with project aggregates."""
    id: UUID
    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    total_contract_value: float = 0
    outstanding_balance: float = 0
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ClientListResponse(BaseModel):
    """Schema for client list response."""
    items: List[ClientResponse]
    total: int
    page: int
    page_size: int
