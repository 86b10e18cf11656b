"""
Transaction Type Model

A billable service definition (training session, full board, farrier
visit...) scoped to one organization.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, Float, Integer, ForeignKey, Index
from datetime import datetime
from stable_admin.database import Base
import enum
import uuid


class TransactionCategory(str, enum.Enum):
    TRAINING = "training"
    BOARDING = "boarding"
    VETERINARY = "veterinary"
    GROOMING = "grooming"
    FARRIER = "farrier"
    FEED = "feed"
    MEDICINE = "medicine"
    TRANSPORTATION = "transportation"
    OTHER = "other"


class UnitType(str, enum.Enum):
    HOUR = "hour"
    DAY = "day"
    SESSION = "session"
    MONTH = "month"
    EVENT = "event"
    TASK = "task"
    HEAD = "head"
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class BillingFrequency(str, enum.Enum):
    DAILY = "daily"
    SESSION = "session"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    PER_EVENT = "per_event"
    PERCENTAGE = "percentage"
    PER_TASK = "per_task"


class TransactionType(Base):
    __tablename__ = "transaction_types"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    organization_id = Column(
        String(36),
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(20), nullable=False, index=True)

    # Pricing
    default_rate = Column(Float, nullable=False)
    unit_type = Column(String(20), nullable=False)
    billing_frequency = Column(String(20), nullable=False)
    price_range_min = Column(Float, nullable=True)
    price_range_max = Column(Float, nullable=True)
    market_reference = Column(String(255), nullable=True)
    service_tier = Column(String(20), default="standard", nullable=False)

    # Flags
    is_system_default = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    is_recurring = Column(Boolean, default=False, nullable=False)
    auto_billing_enabled = Column(Boolean, default=False, nullable=False)
    requires_approval = Column(Boolean, default=False, nullable=False)

    billing_cycle_days = Column(Integer, default=0, nullable=False)
    max_tasks_per_cycle = Column(Integer, default=0, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_transaction_type_organization_category', 'organization_id', 'category'),
    )

    def __repr__(self):
        return f"<TransactionType {self.name} ({self.category})>"
