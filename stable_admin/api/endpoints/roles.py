"""
Role Endpoints

Roles are always scoped to one organization. Capability flags are derived
from the submitted permission list.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from stable_admin.api.deps import get_organization_or_404
from stable_admin.core.exceptions import ValidationError
from stable_admin.database import get_db, commit_or_raise
from stable_admin.models.role import Role
from stable_admin.schemas.role import RoleCreate, RoleEnvelope, RoleListResponse, RoleResponse
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("", response_model=RoleListResponse)
async def list_roles(
    organization_id: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """List an organization's roles by name."""
    if not organization_id:
        raise ValidationError(["organization_id is required"], message="organization_id is required")

    roles = db.query(Role).filter(
        Role.organization_id == organization_id
    ).order_by(Role.name.asc()).all()

    return RoleListResponse(roles=[RoleResponse.model_validate(role) for role in roles])


@router.post("", response_model=RoleEnvelope, status_code=status.HTTP_201_CREATED)
async def create_role(
    role_data: RoleCreate,
    db: Session = Depends(get_db)
):
    """Create a custom role in an existing organization."""
    get_organization_or_404(role_data.organization_id, db)

    role = Role.from_permissions(
        role_data.organization_id,
        role_data.name,
        role_data.permissions,
        description=role_data.description,
        color=role_data.color
    )
    db.add(role)
    commit_or_raise(db, "create role")
    db.refresh(role)

    logger.info(f"Role created: {role.id} in organization {role.organization_id}")
    return RoleEnvelope(role=RoleResponse.model_validate(role))
