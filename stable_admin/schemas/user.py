"""
User Schemas

Request/response models for auth accounts.
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class UserCreate(BaseModel):
    """Schema for creating a new auth account."""
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=100)
    full_name: Optional[str] = None
    phone: Optional[str] = None


class UserResponse(BaseModel):
    """Auth account response (excludes the password hash)."""
    id: str
    email: str
    user_metadata: Dict[str, Any]
    email_confirmed: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UserEnvelope(BaseModel):
    user: UserResponse


class UserListResponse(BaseModel):
    users: List[UserResponse]


class UserOrganization(BaseModel):
    id: str
    name: str
    type: str
    description: Optional[str] = None
    role_name: str
    role_color: Optional[str] = None
    joined_at: datetime


class UserWithOrganizations(BaseModel):
    """Row of the user/organization selector."""
    id: str
    email: Optional[str]
    created_at: datetime
    organizations: List[UserOrganization]
    display_name: Optional[str]
    has_organizations: bool


class UsersWithOrganizationsResponse(BaseModel):
    users: List[UserWithOrganizations]
