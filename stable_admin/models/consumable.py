"""
Consumable Model

Tracked inventory: feed, medicine, supplements, equipment and supplies.
Stock levels are never negative.
"""
from sqlalchemy import Column, String, Text, Boolean, DateTime, Float, Integer, ForeignKey, Index, JSON
from datetime import datetime
from stable_admin.database import Base
import enum
import uuid


class ConsumableType(str, enum.Enum):
    MEDICINE = "medicine"
    FEED = "feed"
    SUPPLEMENT = "supplement"
    EQUIPMENT = "equipment"
    SUPPLY = "supply"


class Consumable(Base):
    __tablename__ = "consumables"

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

    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    brand = Column(String(255), nullable=True)
    specifications = Column(JSON, default=dict, nullable=False)

    default_quantity = Column(Float, nullable=False)
    default_unit_type = Column(String(20), nullable=False)
    cost_per_unit = Column(Float, default=0, nullable=False)
    supplier = Column(String(255), nullable=True)

    # Stock levels
    current_stock = Column(Float, default=0, nullable=False)
    minimum_stock = Column(Float, default=0, nullable=False)
    reorder_point = Column(Float, default=0, nullable=False)

    is_active = Column(Boolean, default=True, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)

    # Medicine-specific
    requires_prescription = Column(Boolean, default=False, nullable=False)
    withdrawal_period_days = Column(Integer, default=0, nullable=False)

    barcode = Column(String(100), nullable=True)
    sku = Column(String(100), nullable=True)
    storage_requirements = Column(Text, nullable=True)
    expiry_date = Column(String(10), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_consumable_organization_type', 'organization_id', 'type'),
    )

    def __repr__(self):
        return f"<Consumable {self.name} ({self.type})>"

    @property
    def needs_reorder(self) -> bool:
        return self.current_stock <= self.reorder_point
