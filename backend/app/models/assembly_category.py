"""
Assembly category model.
"""

from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from app.db.base import Base, TimestampMixin


class AssemblyCategory(TimestampMixin, Base):
    """Category owning assemblies and assembly groups."""

    __tablename__ = "assembly_categories"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(String(2000), nullable=True)
    color = Column(String(20), nullable=True)
    icon = Column(String(100), nullable=True)

    # Relationships
    assemblies = relationship("Assembly", back_populates="category", order_by="Assembly.name")
    groups = relationship("AssemblyGroup", back_populates="category")
