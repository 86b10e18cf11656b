"""
Organization Model

The organization is the tenant: a stable, a trainer business, an
enterprise or a generic organization. Roles, members, horses, consumables
and service pricing all hang off it.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Index, Integer, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from stable_admin.database import Base
import enum
import uuid


class OrganizationType(str, enum.Enum):
    STABLE = "stable"
    ORGANIZATION = "organization"
    TRAINER = "trainer"
    ENTERPRISE = "enterprise"


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, index=True)  # see OrganizationType
    description = Column(Text, nullable=True)

    # Set by the provisioning workflow; plain inserts may leave it empty
    owner_id = Column(
        String(36),
        ForeignKey("auth_accounts.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Contact fields
    address = Column(String(500), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    website = Column(String(255), nullable=True)
    logo_url = Column(String(500), nullable=True)

    settings = Column(JSON, default=dict, nullable=False)

    subscription_tier = Column(String(20), default="basic", nullable=False)  # basic, premium, enterprise
    subscription_expires_at = Column(DateTime, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    # Denormalized counter written at creation; listings recompute it live
    member_count = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("AuthAccount", foreign_keys=[owner_id])
    roles = relationship("Role", back_populates="organization", cascade="all, delete-orphan")
    members = relationship("OrganizationMember", back_populates="organization", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_organization_active_created', 'is_active', 'created_at'),
    )

    def __repr__(self):
        return f"<Organization {self.name} ({self.type})>"
