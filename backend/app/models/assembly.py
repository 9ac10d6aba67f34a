"""
Assembly model and its bill-of-materials join rows.
"""

from sqlalchemy import Column, String, Float, ForeignKey, Enum as SQLEnum, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin


class AssemblyModule(str, enum.Enum):
    """Trade module an assembly belongs to."""
    ELECTRONIC = "ELECTRONIC"
    ELECTRICAL = "ELECTRICAL"
    ASSEMBLY = "ASSEMBLY"
    INSTALLATION = "INSTALLATION"
    MECHANICAL = "MECHANICAL"


class Assembly(TimestampMixin, Base):
    """Assembly built from a list of material quantities."""

    __tablename__ = "assemblies"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(String(2000), nullable=True)
    part_number = Column(String(100), nullable=True)
    manufacturer = Column(String(255), nullable=True)
    unit = Column(String(50), nullable=False, default="EACH")
    price = Column(Float, nullable=False, default=0)
    module = Column(SQLEnum(AssemblyModule), nullable=False, default=AssemblyModule.ELECTRICAL)
    category_id = Column(UUID(as_uuid=True), ForeignKey("assembly_categories.id"), nullable=False, index=True)

    # Relationships
    category = relationship("AssemblyCategory", back_populates="assemblies")
    materials = relationship(
        "AssemblyMaterial",
        back_populates="assembly",
        cascade="all, delete-orphan",
        order_by="AssemblyMaterial.id",
    )

    @property
    def material_cost(self) -> float:
        """Sum of material price times quantity; requires materials to be loaded."""
        return sum(
            (link.material.price or 0) * (link.quantity or 0)
            for link in self.materials
            if link.material is not None
        )

    @property
    def unit_cost(self) -> float:
        """Cost of one assembly: its materials, or its own price when it has none."""
        if self.materials:
            return self.material_cost
        return self.price or 0


class AssemblyMaterial(Base):
    """Quantity of one material inside one assembly."""

    __tablename__ = "assembly_materials"
    __table_args__ = (
        UniqueConstraint("assembly_id", "material_id", name="uq_assembly_material"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    assembly_id = Column(UUID(as_uuid=True), ForeignKey("assemblies.id", ondelete="CASCADE"), nullable=False, index=True)
    material_id = Column(UUID(as_uuid=True), ForeignKey("materials.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=1)

    # Relationships
    assembly = relationship("Assembly", back_populates="materials")
    material = relationship("Material", back_populates="assembly_links")
