"""
Organization Member Endpoints

Memberships link an auth account to an organization through one role.
A user has at most one membership per organization.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, joinedload
from typing import Optional

from stable_admin.core.exceptions import NotFoundError, ValidationError
from stable_admin.database import get_db, commit_or_raise
from stable_admin.models.member import OrganizationMember
from stable_admin.models.role import Role
from stable_admin.schemas.member import (
    MemberAssign,
    MemberCreate,
    MemberEnvelope,
    MemberListResponse,
    MemberResponse,
    MemberUpdate,
)
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organization-members", tags=["organization-members"])


def _check_role_scope(db: Session, role_id: str, organization_id: str) -> None:
    """A member's role must belong to the member's organization."""
    role = db.query(Role).filter(Role.id == role_id).first()
    if not role:
        raise ValidationError([f"role_id: role {role_id} does not exist"])
    if role.organization_id != organization_id:
        raise ValidationError([f"role_id: role {role_id} belongs to another organization"])


def _load_member(db: Session, member_id: str) -> OrganizationMember:
    member = db.query(OrganizationMember).options(
        joinedload(OrganizationMember.account),
        joinedload(OrganizationMember.role)
    ).filter(OrganizationMember.id == member_id).populate_existing().first()
    if not member:
        raise NotFoundError("Organization member", member_id)
    return member


@router.get("", response_model=MemberListResponse)
async def list_members(
    organization_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    List memberships, most recently joined first.

    Each row carries the account email/metadata and the role name/color.
    """
    query = db.query(OrganizationMember).options(
        joinedload(OrganizationMember.account),
        joinedload(OrganizationMember.role)
    )
    if organization_id:
        query = query.filter(OrganizationMember.organization_id == organization_id)

    members = query.order_by(OrganizationMember.joined_at.desc()).all()
    return MemberListResponse(members=[MemberResponse.model_validate(m) for m in members])


@router.post("", response_model=MemberEnvelope, status_code=status.HTTP_201_CREATED)
async def create_member(
    member_data: MemberCreate,
    db: Session = Depends(get_db)
):
    """Add a user to an organization with the given role."""
    _check_role_scope(db, member_data.role_id, member_data.organization_id)

    member = OrganizationMember(**member_data.model_dump())
    db.add(member)
    commit_or_raise(db, "create organization member")

    logger.info(f"Member added: user={member.user_id} organization={member.organization_id}")
    return MemberEnvelope(member=MemberResponse.model_validate(_load_member(db, member.id)))


@router.post("/assign", response_model=MemberEnvelope)
async def assign_member(
    assignment: MemberAssign,
    db: Session = Depends(get_db)
):
    """
    Assign a user to an organization.

    If the user already belongs to the organization the membership is
    reactivated with the new role; otherwise a membership is created.
    """
    _check_role_scope(db, assignment.role_id, assignment.organization_id)

    member = db.query(OrganizationMember).filter(
        OrganizationMember.user_id == assignment.user_id,
        OrganizationMember.organization_id == assignment.organization_id
    ).first()

    created = member is None
    if created:
        member = OrganizationMember(**assignment.model_dump(), is_active=True)
        db.add(member)
    else:
        member.role_id = assignment.role_id
        member.is_active = True

    commit_or_raise(db, "assign user to organization")

    logger.info(
        f"Member {'added' if created else 'updated'}: "
        f"user={member.user_id} organization={member.organization_id}"
    )
    return MemberEnvelope(member=MemberResponse.model_validate(_load_member(db, member.id)), created=created)


@router.api_route("/{member_id}", methods=["PATCH", "PUT"], response_model=MemberEnvelope)
async def update_member(
    member_id: str,
    member_data: MemberUpdate,
    db: Session = Depends(get_db)
):
    """Change a membership's role or toggle it active/inactive."""
    member = _load_member(db, member_id)

    update_data = member_data.model_dump(exclude_unset=True, exclude_none=True)
    if "role_id" in update_data:
        _check_role_scope(db, update_data["role_id"], member.organization_id)

    for field, value in update_data.items():
        setattr(member, field, value)

    commit_or_raise(db, "update organization member")

    logger.info(f"Member updated: {member.id}")
    return MemberEnvelope(member=MemberResponse.model_validate(_load_member(db, member.id)))
