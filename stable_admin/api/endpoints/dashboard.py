"""
Dashboard Endpoints

Read-only aggregates for the admin home page and the user selector.
"""
from collections import defaultdict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stable_admin.database import get_db
from stable_admin.models.organization import OrganizationType
from stable_admin.schemas.dashboard import (
    DashboardOrganization,
    DashboardResponse,
    DashboardStats,
    DashboardUser,
)
from stable_admin.schemas.user import (
    UserOrganization,
    UserWithOrganizations,
    UsersWithOrganizationsResponse,
)
from stable_admin.services.directory import (
    active_memberships,
    organizations_with_member_counts,
    profiles_newest_first,
)
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(db: Session = Depends(get_db)):
    """
    Platform statistics.

    Counts cover active organizations only; users are counted by profile.
    """
    organizations = [
        DashboardOrganization(
            id=org.id,
            name=org.name,
            type=org.type,
            description=org.description,
            created_at=org.created_at,
            is_active=org.is_active,
            member_count=member_count
        )
        for org, member_count in organizations_with_member_counts(db, active_only=True)
    ]
    users = [
        DashboardUser(id=profile.id, email=profile.email, created_at=profile.created_at)
        for profile in profiles_newest_first(db)
    ]

    def count_of(organization_type: OrganizationType) -> int:
        return sum(1 for org in organizations if org.type == organization_type.value)

    stats = DashboardStats(
        totalOrganizations=len(organizations),
        trainerOrganizations=count_of(OrganizationType.TRAINER),
        stableOrganizations=count_of(OrganizationType.STABLE),
        enterpriseOrganizations=count_of(OrganizationType.ENTERPRISE),
        totalUsers=len(users),
        organizations=organizations,
        users=users
    )
    return DashboardResponse(stats=stats)


@router.get("/users-with-organizations", response_model=UsersWithOrganizationsResponse)
async def list_users_with_organizations(db: Session = Depends(get_db)):
    """Every profiled user with their active memberships, for the selector."""
    by_user = defaultdict(list)
    for membership in active_memberships(db):
        by_user[membership.user_id].append(
            UserOrganization(
                id=membership.organization_id,
                name=membership.organization.name,
                type=membership.organization.type,
                description=membership.organization.description,
                role_name=membership.role.name,
                role_color=membership.role.color,
                joined_at=membership.joined_at
            )
        )

    users = []
    for profile in profiles_newest_first(db):
        organizations = by_user.get(profile.user_id, [])
        users.append(UserWithOrganizations(
            id=profile.user_id,
            email=profile.email,
            created_at=profile.created_at,
            organizations=organizations,
            display_name=profile.email,
            has_organizations=bool(organizations)
        ))

    return UsersWithOrganizationsResponse(users=users)
