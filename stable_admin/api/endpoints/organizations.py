"""
Organization Endpoints

Plain organization records plus the guided setup that provisions an
organization together with its owner, roles, membership and profile.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stable_admin.api.deps import get_app_settings
from stable_admin.config import Settings
from stable_admin.database import get_db, commit_or_raise
from stable_admin.models.organization import Organization
from stable_admin.schemas.organization import (
    OrganizationCreate,
    OrganizationEnvelope,
    OrganizationListResponse,
    OrganizationResponse,
    OrganizationSetupRequest,
    ProvisioningResponse,
)
from stable_admin.services.directory import organizations_with_member_counts
from stable_admin.services.provisioning import OrganizationProvisioner, summarize
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("", response_model=OrganizationListResponse)
async def list_organizations(db: Session = Depends(get_db)):
    """
    List all organizations, newest first.

    member_count is recomputed from the membership table on every call.
    """
    rows = organizations_with_member_counts(db)
    organizations = [
        OrganizationResponse.model_validate(organization).model_copy(update={"member_count": count})
        for organization, count in rows
    ]
    logger.debug(f"Listed {len(organizations)} organizations")
    return OrganizationListResponse(organizations=organizations)


@router.post("", response_model=OrganizationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_organization(
    organization_data: OrganizationCreate,
    db: Session = Depends(get_db)
):
    """
    Insert an organization record as submitted.

    Name and type are required. No roles or members are created; use
    POST /organizations/setup to onboard a new organization.
    """
    organization = Organization(**organization_data.model_dump())
    db.add(organization)
    commit_or_raise(db, "create organization")
    db.refresh(organization)

    logger.info(f"Organization created: {organization.id}")
    return OrganizationEnvelope(organization=OrganizationResponse.model_validate(organization))


@router.post("/setup", response_model=ProvisioningResponse, status_code=status.HTTP_201_CREATED)
async def setup_organization(
    setup_data: OrganizationSetupRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Onboard a new organization and its owner.

    Creates the owner account, the organization, its default roles, the
    owner's admin membership and the owner's profile in one transaction.
    """
    result = OrganizationProvisioner(db, settings).provision(setup_data)

    return ProvisioningResponse(
        message="Organization created successfully",
        organization=OrganizationResponse.model_validate(result.organization),
        **summarize(result)
    )
