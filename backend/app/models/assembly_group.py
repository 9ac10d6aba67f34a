"""
Assembly group model: a selection-rule bundle over assemblies of one category.
"""

from sqlalchemy import Column, String, Integer, Boolean, JSON, ForeignKey, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin


class GroupType(str, enum.Enum):
    """Selection policy presented for a group."""
    REQUIRED = "REQUIRED"
    CHOOSE_ONE = "CHOOSE_ONE"
    OPTIONAL = "OPTIONAL"
    CONFLICT = "CONFLICT"


class AssemblyGroup(TimestampMixin, Base):
    """Group of assemblies governed by one selection rule."""

    __tablename__ = "assembly_groups"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(String(2000), nullable=True)
    group_type = Column(SQLEnum(GroupType), nullable=False)
    category_id = Column(UUID(as_uuid=True), ForeignKey("assembly_categories.id"), nullable=False, index=True)
    sort_order = Column(Integer, nullable=False, default=0)

    # Relationships
    category = relationship("AssemblyCategory", back_populates="groups")
    items = relationship(
        "AssemblyGroupItem",
        back_populates="group",
        cascade="all, delete-orphan",
        order_by="AssemblyGroupItem.sort_order",
    )


class AssemblyGroupItem(Base):
    """One assembly inside a group, with its quantity and rule flags."""

    __tablename__ = "assembly_group_items"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    group_id = Column(UUID(as_uuid=True), ForeignKey("assembly_groups.id", ondelete="CASCADE"), nullable=False, index=True)
    assembly_id = Column(UUID(as_uuid=True), ForeignKey("assemblies.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=1)
    # Assembly ids (as strings) of the same group that cannot be chosen together with this one
    conflicts_with = Column(JSON, nullable=False, default=list)
    is_default = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)

    # Relationships
    group = relationship("AssemblyGroup", back_populates="items")
    assembly = relationship("Assembly")
