"""
Dashboard Schemas
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class DashboardOrganization(BaseModel):
    id: str
    name: str
    type: str
    description: Optional[str]
    created_at: datetime
    is_active: bool
    member_count: int


class DashboardUser(BaseModel):
    id: str
    email: Optional[str]
    created_at: datetime


class DashboardStats(BaseModel):
    totalOrganizations: int
    trainerOrganizations: int
    stableOrganizations: int
    enterpriseOrganizations: int
    totalUsers: int
    organizations: List[DashboardOrganization]
    users: List[DashboardUser]


class DashboardResponse(BaseModel):
    stats: DashboardStats
