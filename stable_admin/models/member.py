"""
Organization Member Model

Links an auth account to an organization through exactly one role.
A user holds at most one membership per organization; reassigning a user
updates the existing row instead of adding another.
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from stable_admin.database import Base
import uuid


class OrganizationMember(Base):
    __tablename__ = "organization_members"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    organization_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id = Column(
        String(36),
        ForeignKey("auth_accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    role_id = Column(
        String(36),
        ForeignKey("roles.id", ondelete="RESTRICT"),
        nullable=False
    )

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    organization = relationship("Organization", back_populates="members")
    role = relationship("Role", back_populates="members")
    account = relationship("AuthAccount", back_populates="memberships")

    __table_args__ = (
        Index('idx_member_user_organization', 'user_id', 'organization_id', unique=True),
        Index('idx_member_organization_active', 'organization_id', 'is_active'),
    )

    def __repr__(self):
        return f"<OrganizationMember user={self.user_id} organization={self.organization_id}>"
