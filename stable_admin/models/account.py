"""
Auth Account Model

The authentication record of a platform user (owner, staff, client).
Distinct from UserProfile, which carries display metadata.

Passwords are stored as bcrypt hashes only.
"""
from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from stable_admin.database import Base
import uuid


class AuthAccount(Base):
    __tablename__ = "auth_accounts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    # Free-form metadata: full_name, phone, role hint
    user_metadata = Column(JSON, default=dict, nullable=False)

    # Accounts created by an admin are confirmed up front
    email_confirmed = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    memberships = relationship("OrganizationMember", back_populates="account", cascade="all, delete-orphan")
    profile = relationship("UserProfile", back_populates="account", uselist=False, cascade="all, delete-orphan")

    def __repr__(self):
        return f"<AuthAccount {self.email}>"
