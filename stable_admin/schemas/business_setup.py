"""
Business Setup Schemas

Create schemas are built by core.validation after coercion, so they
describe the typed shape that reaches the database. Setup requests accept
loosely typed items because form payloads are validated by hand to
produce numbered, field-specific messages.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from stable_admin.models.consumable import ConsumableType
from stable_admin.models.horse import HorseGender, HorseStatus
from stable_admin.models.transaction_type import BillingFrequency, TransactionCategory, UnitType


# ============================================================================
# HORSES
# ============================================================================

class HorseCreate(BaseModel):
    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    name: str
    registered_name: Optional[str] = None
    nickname: Optional[str] = None
    breed: str
    gender: HorseGender
    birth_date: Optional[str] = None
    color: Optional[str] = None
    markings: Optional[str] = None
    registration_number: Optional[str] = None
    microchip_number: Optional[str] = None
    passport_number: Optional[str] = None
    height_hands: Optional[float] = None
    weight_kg: Optional[float] = None
    status: HorseStatus = HorseStatus.ACTIVE
    location: Optional[str] = None
    owner_name: Optional[str] = None
    owner_contact: Optional[str] = None
    insurance_details: Dict[str, Any] = Field(default_factory=dict)
    medical_notes: Optional[str] = None
    dietary_restrictions: List[str] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)
    is_active: bool = True

    class Config:
        use_enum_values = True


class HorseResponse(HorseCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        use_enum_values = True


class HorseSetupRequest(BaseModel):
    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    horses: List[Any] = Field(default_factory=list)


class HorseListResponse(BaseModel):
    horses: List[HorseResponse]
    count: int


# ============================================================================
# CONSUMABLES
# ============================================================================

class ConsumableCreate(BaseModel):
    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    name: str
    type: ConsumableType
    category: str
    brand: Optional[str] = None
    specifications: Dict[str, Any] = Field(default_factory=dict)
    default_quantity: float = Field(..., gt=0)
    default_unit_type: str
    cost_per_unit: float = Field(0, ge=0)
    supplier: Optional[str] = None
    current_stock: float = Field(..., ge=0)
    minimum_stock: float = Field(..., ge=0)
    reorder_point: float = Field(..., ge=0)
    is_active: bool = True
    is_default: bool = False
    requires_prescription: bool = False
    withdrawal_period_days: int = Field(0, ge=0)
    barcode: Optional[str] = None
    sku: Optional[str] = None
    storage_requirements: Optional[str] = None
    expiry_date: Optional[str] = None

    class Config:
        use_enum_values = True


class ConsumableResponse(ConsumableCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        use_enum_values = True


class ConsumableSetupRequest(BaseModel):
    user_id: Optional[str] = None
    organization_id: Optional[str] = None
    consumables: List[Any] = Field(default_factory=list)


class ConsumableListResponse(BaseModel):
    consumables: List[ConsumableResponse]
    count: int


# ============================================================================
# SERVICE PRICING
# ============================================================================

class TransactionTypeCreate(BaseModel):
    organization_id: str
    name: str
    description: Optional[str] = None
    category: TransactionCategory
    default_rate: float = Field(..., ge=0)
    unit_type: UnitType
    billing_frequency: BillingFrequency
    price_range_min: Optional[float] = Field(None, ge=0)
    price_range_max: Optional[float] = Field(None, ge=0)
    market_reference: Optional[str] = None
    service_tier: str = "standard"
    is_system_default: bool = False
    is_active: bool = True
    is_recurring: bool = False
    auto_billing_enabled: bool = False
    requires_approval: bool = False
    billing_cycle_days: int = 0
    max_tasks_per_cycle: int = 0

    class Config:
        use_enum_values = True


class TransactionTypeResponse(TransactionTypeCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        use_enum_values = True


class ServicePricingSetupRequest(BaseModel):
    organization_id: Optional[str] = None
    transaction_types: List[Any] = Field(default_factory=list)


class TransactionTypeListResponse(BaseModel):
    transaction_types: List[TransactionTypeResponse]
    count: int


class ServiceTemplate(BaseModel):
    name: str
    default_rate: float
    unit_type: UnitType
    billing_frequency: BillingFrequency
    service_tier: str
    is_recurring: bool = False

    class Config:
        use_enum_values = True


# ============================================================================
# RESPONSE ENVELOPE
# ============================================================================

class BusinessSetupResponse(BaseModel):
    """Body returned by every batch setup endpoint."""
    success: bool
    message: str
    data: Optional[Dict[str, int]] = None
    errors: Optional[List[str]] = None


class ServiceTemplateCatalog(BaseModel):
    """Templates keyed by transaction category."""
    templates: Dict[str, List[ServiceTemplate]]
