"""
User Profile Schemas
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from stable_admin.models.profile import AccountType


class ProfileCreate(BaseModel):
    user_id: str = Field(..., min_length=1)
    account_type: AccountType = AccountType.PERSONAL
    display_name: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    is_active: bool = True

    class Config:
        use_enum_values = True


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    email: Optional[str]
    account_type: str
    display_name: Optional[str]
    bio: Optional[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileOrganization(BaseModel):
    """One membership of a profile, flattened with its organization."""
    id: str
    name: str
    type: str
    description: Optional[str]
    member_role: str
    joined_at: datetime
    is_active: bool


class ProfileWithOrganizations(ProfileResponse):
    organizations: List[ProfileOrganization] = []


class ProfileEnvelope(BaseModel):
    profile: ProfileResponse


class ProfileListResponse(BaseModel):
    profiles: List[ProfileWithOrganizations]
