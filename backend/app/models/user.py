"""
User model for back-office staff and client logins.
"""

from sqlalchemy import Column, String, Float, Date, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid
import enum

from app.db.base import Base, TimestampMixin


class UserRole(str, enum.Enum):
    """User role enumeration."""
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    PROJECT_MANAGER = "PROJECT_MANAGER"
    SITE_MANAGER = "SITE_MANAGER"
    FOREMAN = "FOREMAN"
    ENGINEER = "ENGINEER"
    WORKER = "WORKER"
    CLIENT = "CLIENT"
    ACCOUNTANT = "ACCOUNTANT"
    ESTIMATOR = "ESTIMATOR"


class UserStatus(str, enum.Enum):
    """User status enumeration."""
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    PENDING_VERIFICATION = "PENDING_VERIFICATION"


class User(TimestampMixin, Base):
    """User model."""

    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(SQLEnum(UserRole), nullable=False, default=UserRole.WORKER, index=True)
    status = Column(SQLEnum(UserStatus), nullable=False, default=UserStatus.ACTIVE, index=True)

    # Employment
    phone = Column(String(50), nullable=True)
    employee_id = Column(String(50), nullable=True, unique=True)
    department = Column(String(100), nullable=True)
    position = Column(String(100), nullable=True)
    hire_date = Column(Date, nullable=True)
    salary = Column(Float, nullable=True)

    # Relationships
    created_projects = relationship("Project", back_populates="creator")
