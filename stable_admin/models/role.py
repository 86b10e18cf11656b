"""
Role Model

A named permission bundle scoped to exactly one organization. The boolean
capability flags are derived from the permission list when the role is
built (see Role.from_permissions).
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from stable_admin.database import Base
import uuid


# permission string -> capability flag column
CAPABILITY_FLAGS = {
    "assign_tasks": "can_assign_tasks",
    "manage_horses": "can_manage_horses",
    "view_all": "can_view_all_horses",
    "manage_organization": "can_manage_organization",
}


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    organization_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    permissions = Column(JSON, default=list, nullable=False)

    can_assign_tasks = Column(Boolean, default=False, nullable=False)
    can_manage_horses = Column(Boolean, default=False, nullable=False)
    can_view_all_horses = Column(Boolean, default=False, nullable=False)
    can_manage_organization = Column(Boolean, default=False, nullable=False)

    color = Column(String(20), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    organization = relationship("Organization", back_populates="roles")
    members = relationship("OrganizationMember", back_populates="role")

    __table_args__ = (
        Index('idx_role_organization_name', 'organization_id', 'name'),
    )

    def __repr__(self):
        return f"<Role {self.name} (organization={self.organization_id})>"

    @classmethod
    def from_permissions(cls, organization_id, name, permissions, **fields):
        """Build a role with its capability flags derived from permissions."""
        permissions = list(permissions or [])
        flags = {
            column: permission in permissions
            for permission, column in CAPABILITY_FLAGS.items()
        }
        return cls(
            organization_id=organization_id,
            name=name,
            permissions=permissions,
            **flags,
            **fields
        )
