"""
User Profile Endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, selectinload

from stable_admin.core.exceptions import NotFoundError
from stable_admin.database import get_db, commit_or_raise
from stable_admin.models.account import AuthAccount
from stable_admin.models.member import OrganizationMember
from stable_admin.models.profile import UserProfile
from stable_admin.schemas.profile import (
    ProfileCreate,
    ProfileEnvelope,
    ProfileListResponse,
    ProfileOrganization,
    ProfileResponse,
    ProfileWithOrganizations,
)
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("", response_model=ProfileListResponse)
async def list_profiles(
    include_organizations: bool = Query(False),
    db: Session = Depends(get_db)
):
    """
    List profiles, newest first.

    With include_organizations=true every profile also lists its
    memberships flattened with the organization's fields.
    """
    query = db.query(UserProfile)
    if include_organizations:
        query = query.options(
            selectinload(UserProfile.account)
            .selectinload(AuthAccount.memberships)
            .selectinload(OrganizationMember.organization)
        )
    profiles = query.order_by(UserProfile.created_at.desc()).all()

    results = []
    for profile in profiles:
        row = ProfileWithOrganizations.model_validate(profile, from_attributes=True)
        if include_organizations and profile.account is not None:
            row.organizations = [
                ProfileOrganization(
                    id=membership.organization.id,
                    name=membership.organization.name,
                    type=membership.organization.type,
                    description=membership.organization.description,
                    member_role=membership.role_id,
                    joined_at=membership.joined_at,
                    is_active=membership.is_active
                )
                for membership in profile.account.memberships
            ]
        results.append(row)

    return ProfileListResponse(profiles=results)


@router.post("", response_model=ProfileEnvelope, status_code=status.HTTP_201_CREATED)
async def create_profile(
    profile_data: ProfileCreate,
    db: Session = Depends(get_db)
):
    """Create the profile record of an existing auth account."""
    account = db.query(AuthAccount).filter(AuthAccount.id == profile_data.user_id).first()
    if not account:
        raise NotFoundError("User", profile_data.user_id)

    profile = UserProfile(**profile_data.model_dump(), email=account.email)
    db.add(profile)
    commit_or_raise(db, "create user profile")
    db.refresh(profile)

    logger.info(f"Profile created: {profile.id} for user {profile.user_id}")
    return ProfileEnvelope(profile=ProfileResponse.model_validate(profile))
