"""
Client model for construction customers.
"""

from sqlalchemy import Column, String, Float, Integer, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin


class ClientType(str, enum.Enum):
    """Client type enumeration."""
    INDIVIDUAL = "INDIVIDUAL"
    COMPANY = "COMPANY"
    GOVERNMENT = "GOVERNMENT"
    CONTRACTOR = "CONTRACTOR"


class ClientCategory(str, enum.Enum):
    """Client market category enumeration."""
    RESIDENTIAL = "RESIDENTIAL"
    COMMERCIAL = "COMMERCIAL"
    INDUSTRIAL = "INDUSTRIAL"
    INFRASTRUCTURE = "INFRASTRUCTURE"
    INSTITUTIONAL = "INSTITUTIONAL"


class ClientStatus(str, enum.Enum):
    """Client status enumeration."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    PENDING_APPROVAL = "PENDING_APPROVAL"
    BLACKLISTED = "BLACKLISTED"


class Client(TimestampMixin, Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    client_type = Column(SQLEnum(ClientType), nullable=False, default=ClientType.INDIVIDUAL)
    category = Column(SQLEnum(ClientCategory), nullable=False, default=ClientCategory.RESIDENTIAL)
    status = Column(SQLEnum(ClientStatus), nullable=False, default=ClientStatus.ACTIVE, index=True)

    # Company information
    company_name = Column(String(255), nullable=True, index=True)
    business_license = Column(String(100), nullable=True)
    tax_id = Column(String(100), nullable=True)

    # Contact information
    contact_person = Column(String(255), nullable=False, index=True)
    contact_position = Column(String(255), nullable=True)
    contact_email = Column(String(255), nullable=False, unique=True, index=True)
    contact_phone = Column(String(50), nullable=False)
    alternate_phone = Column(String(50), nullable=True)

    # Address
    address = Column(String(500), nullable=False)
    city = Column(String(100), nullable=False)
    province = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=True)
    country = Column(String(100), nullable=False, default="Indonesia")

    # Financial
    annual_revenue = Column(Float, nullable=True)
    credit_limit = Column(Float, nullable=True)
    payment_terms = Column(Integer, nullable=False, default=30)

    notes = Column(String(2000), nullable=True)

    # Relationships
    projects = relationship("Project", back_populates="client")
