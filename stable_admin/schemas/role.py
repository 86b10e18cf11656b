"""
Role Schemas
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class RoleCreate(BaseModel):
    organization_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    permissions: List[str] = Field(default_factory=list)
    color: Optional[str] = None


class RoleResponse(BaseModel):
    id: str
    organization_id: str
    name: str
    description: Optional[str]
    permissions: List[str]
    can_assign_tasks: bool
    can_manage_horses: bool
    can_view_all_horses: bool
    can_manage_organization: bool
    color: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class RoleEnvelope(BaseModel):
    role: RoleResponse


class RoleListResponse(BaseModel):
    roles: List[RoleResponse]
