"""
Horse Model

Horses are scoped to an organization, a user, or both. Numeric fields are
optional; list fields default to empty lists.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, Float, ForeignKey, Index, JSON
from datetime import datetime
from stable_admin.database import Base
import enum
import uuid


class HorseGender(str, enum.Enum):
    STALLION = "stallion"
    MARE = "mare"
    GELDING = "gelding"
    FILLY = "filly"
    COLT = "colt"


class HorseStatus(str, enum.Enum):
    ACTIVE = "active"
    RETIRED = "retired"
    INJURED = "injured"
    BREEDING = "breeding"
    TRAINING = "training"
    RACING = "racing"


class Horse(Base):
    __tablename__ = "horses"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    organization_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=True,
        index=True
    )
    user_id = Column(
        String(36),
        ForeignKey("auth_accounts.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Identity
    name = Column(String(255), nullable=False)
    registered_name = Column(String(255), nullable=True)
    nickname = Column(String(100), nullable=True)
    breed = Column(String(100), nullable=False)
    gender = Column(String(20), nullable=False)
    birth_date = Column(String(10), nullable=True)  # ISO date as entered
    color = Column(String(50), nullable=True)
    markings = Column(Text, nullable=True)

    # Registration
    registration_number = Column(String(100), nullable=True)
    microchip_number = Column(String(100), nullable=True)
    passport_number = Column(String(100), nullable=True)

    height_hands = Column(Float, nullable=True)
    weight_kg = Column(Float, nullable=True)

    status = Column(String(20), default=HorseStatus.ACTIVE.value, nullable=False)
    location = Column(String(255), nullable=True)

    # Ownership and medical
    owner_name = Column(String(255), nullable=True)
    owner_contact = Column(String(255), nullable=True)
    insurance_details = Column(JSON, default=dict, nullable=False)
    medical_notes = Column(Text, nullable=True)
    dietary_restrictions = Column(JSON, default=list, nullable=False)
    photos = Column(JSON, default=list, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_horse_organization_active', 'organization_id', 'is_active'),
        Index('idx_horse_user_active', 'user_id', 'is_active'),
    )

    def __repr__(self):
        return f"<Horse {self.name} ({self.breed})>"
