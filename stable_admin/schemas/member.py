"""
Organization Member Schemas
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import datetime


class MemberCreate(BaseModel):
    organization_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    role_id: str = Field(..., min_length=1)
    is_active: bool = True


class MemberAssign(BaseModel):
    """Assign a user to an organization, updating the membership if one exists."""
    organization_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    role_id: str = Field(..., min_length=1)


class MemberUpdate(BaseModel):
    """Schema for updating a membership. All fields optional."""
    role_id: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class MemberAccount(BaseModel):
    email: str
    user_metadata: Dict[str, Any]

    class Config:
        from_attributes = True


class MemberRole(BaseModel):
    name: str
    color: Optional[str]

    class Config:
        from_attributes = True


class MemberResponse(BaseModel):
    id: str
    organization_id: str
    user_id: str
    role_id: str
    is_active: bool
    joined_at: datetime
    updated_at: datetime
    account: Optional[MemberAccount] = None
    role: Optional[MemberRole] = None

    class Config:
        from_attributes = True


class MemberEnvelope(BaseModel):
    member: MemberResponse
    created: Optional[bool] = None


class MemberListResponse(BaseModel):
    members: List[MemberResponse]
