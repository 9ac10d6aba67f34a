"""
Material model: leaf catalog entry referenced by assembly bills of materials.
"""

from sqlalchemy import Column, String, Float
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from app.db.base import Base, TimestampMixin


class Material(TimestampMixin, Base):
    """Material model for the parts catalog."""

    __tablename__ = "materials"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    part_number = Column(String(100), nullable=True, index=True)
    manufacturer = Column(String(255), nullable=True)
    unit = Column(String(50), nullable=False)
    price = Column(Float, nullable=False, default=0)
    purchase_url = Column(String(1000), nullable=True)
    datasheet_file = Column(String(1000), nullable=True)

    # Relationships
    assembly_links = relationship("AssemblyMaterial", back_populates="material")
