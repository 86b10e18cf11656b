"""
Directory Queries

Read-side queries shared by the organization listing, the dashboard and
the user/organization selector.
"""
from typing import List, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from stable_admin.models.member import OrganizationMember
from stable_admin.models.organization import Organization
from stable_admin.models.profile import UserProfile


def organizations_with_member_counts(db: Session, active_only: bool = False) -> List[Tuple[Organization, int]]:
    """
    Organizations, newest first, each paired with its live member count.

    One query: organizations outer-joined to their memberships and grouped.
    """
    query = (
        db.query(Organization, func.count(OrganizationMember.id))
        .outerjoin(OrganizationMember, OrganizationMember.organization_id == Organization.id)
        .group_by(Organization.id)
    )
    if active_only:
        query = query.filter(Organization.is_active == True)  # noqa: E712
    return query.order_by(Organization.created_at.desc()).all()


def profiles_newest_first(db: Session) -> List[UserProfile]:
    return db.query(UserProfile).order_by(UserProfile.created_at.desc()).all()


def active_memberships(db: Session) -> List[OrganizationMember]:
    """Active memberships with their organization and role loaded."""
    return (
        db.query(OrganizationMember)
        .options(joinedload(OrganizationMember.organization), joinedload(OrganizationMember.role))
        .filter(OrganizationMember.is_active == True)  # noqa: E712
        .all()
    )
