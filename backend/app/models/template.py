"""
Template model: a reusable bill of assemblies that projects can start from.
"""

from sqlalchemy import Column, String, Float, Integer, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from app.db.base import Base, TimestampMixin


class Template(TimestampMixin, Base):
    """Template with assembly quantities and an optional stored group selection."""

    __tablename__ = "templates"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(String(2000), nullable=True)
    # {category_id: {group_id: [assembly_id, ...]}} with string ids
    assembly_selections = Column(JSON, nullable=True)

    # Relationships
    assemblies = relationship(
        "TemplateAssembly",
        back_populates="template",
        cascade="all, delete-orphan",
        order_by="TemplateAssembly.sort_order",
    )
    projects = relationship("Project", back_populates="template")


class TemplateAssembly(Base):
    """Quantity of one assembly inside one template."""

    __tablename__ = "template_assemblies"
    __table_args__ = (
        UniqueConstraint("template_id", "assembly_id", name="uq_template_assembly"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    template_id = Column(UUID(as_uuid=True), ForeignKey("templates.id", ondelete="CASCADE"), nullable=False, index=True)
    assembly_id = Column(UUID(as_uuid=True), ForeignKey("assemblies.id"), nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=1)
    sort_order = Column(Integer, nullable=False, default=0)

    # Relationships
    template = relationship("Template", back_populates="assemblies")
    assembly = relationship("Assembly")
