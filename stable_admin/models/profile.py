"""
User Profile Model

Per-user display metadata kept next to the auth account.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from stable_admin.database import Base
import enum
import uuid


class AccountType(str, enum.Enum):
    PERSONAL = "personal"
    ORGANIZATION = "organization"
    TRAINER = "trainer"


class UserProfile(Base):
    __tablename__ = "user_account_profiles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    user_id = Column(
        String(36),
        ForeignKey("auth_accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True
    )

    # Copied from the account so listings need no join
    email = Column(String(255), nullable=True)

    account_type = Column(String(20), default=AccountType.PERSONAL.value, nullable=False)
    display_name = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    account = relationship("AuthAccount", back_populates="profile")

    def __repr__(self):
        return f"<UserProfile {self.display_name or self.user_id}>"
