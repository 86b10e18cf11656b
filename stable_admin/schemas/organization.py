"""
Organization Schemas

Request/response models for organizations and the provisioning workflow.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from stable_admin.models.organization import OrganizationType


class OrganizationBase(BaseModel):
    """Base organization schema."""
    name: str = Field(..., min_length=1, max_length=255)
    type: OrganizationType
    description: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None

    class Config:
        use_enum_values = True


class OrganizationCreate(OrganizationBase):
    """Plain organization insert, no owner provisioning."""
    owner_id: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    subscription_tier: str = "basic"
    is_active: bool = True


class OrganizationResponse(OrganizationBase):
    id: str
    owner_id: Optional[str]
    settings: Dict[str, Any]
    subscription_tier: str
    subscription_expires_at: Optional[datetime] = None
    is_active: bool
    member_count: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
        use_enum_values = True


class OrganizationEnvelope(BaseModel):
    organization: OrganizationResponse


class OrganizationListResponse(BaseModel):
    organizations: List[OrganizationResponse]


class OrganizationSetupRequest(OrganizationBase):
    """Everything needed to onboard a new organization and its owner."""
    subscription_tier: str = Field("basic", pattern="^(basic|premium|enterprise)$")
    owner_email: EmailStr
    owner_name: str = Field(..., min_length=1, max_length=255)
    owner_password: str = Field(..., min_length=1, max_length=100)

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "name": "Willow Creek Stables",
                "type": "stable",
                "owner_email": "owner@willowcreek.example",
                "owner_name": "Jane Rider",
                "owner_password": "securepassword123",
            }
        }


class ProvisioningResponse(BaseModel):
    success: bool = True
    message: str
    organization: OrganizationResponse
    owner_id: str
    role_ids: List[str]
    member_id: str
    profile_id: str
    steps_completed: List[str]
