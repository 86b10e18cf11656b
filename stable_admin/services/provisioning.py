"""
Organization Provisioning Workflow

Onboards a new organization and its owner in one guided operation:

    create_owner_account -> create_organization -> create_roles
        -> link_owner -> create_profile

Each step consumes the ids produced by the previous ones. All five writes
share one database transaction: every step is flushed as it runs (so a
constraint violation is attributed to the right step) and recorded as
completed, and the transaction is committed only after the last step.
Any failure rolls everything back and raises ProvisioningError naming the
failed step and the steps that were undone.
"""
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
import enum

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stable_admin.config import Settings
from stable_admin.core.exceptions import (
    AdminAPIError,
    AdminRoleNotFoundError,
    PersistenceError,
    ProvisioningError,
    backend_message,
)
from stable_admin.core.permissions import (
    account_type_for,
    find_admin_role,
    role_template_for,
    settings_for,
)
from stable_admin.models.account import AuthAccount
from stable_admin.models.member import OrganizationMember
from stable_admin.models.organization import Organization
from stable_admin.models.profile import UserProfile
from stable_admin.models.role import Role
from stable_admin.schemas.organization import OrganizationSetupRequest
from stable_admin.services.accounts import create_account
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)


class ProvisioningStep(str, enum.Enum):
    CREATE_OWNER_ACCOUNT = "create_owner_account"
    CREATE_ORGANIZATION = "create_organization"
    CREATE_ROLES = "create_roles"
    LINK_OWNER = "link_owner"
    CREATE_PROFILE = "create_profile"


COMMIT = "commit"


@dataclass
class ProvisioningResult:
    """Rows written by a provisioning run plus its completion markers."""
    owner: Optional[AuthAccount] = None
    organization: Optional[Organization] = None
    roles: List[Role] = field(default_factory=list)
    member: Optional[OrganizationMember] = None
    profile: Optional[UserProfile] = None
    steps_completed: List[str] = field(default_factory=list)


class OrganizationProvisioner:
    """Runs the provisioning steps against one session."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def steps(self) -> List[Tuple[ProvisioningStep, Callable[[OrganizationSetupRequest, ProvisioningResult], None]]]:
        return [
            (ProvisioningStep.CREATE_OWNER_ACCOUNT, self.create_owner_account),
            (ProvisioningStep.CREATE_ORGANIZATION, self.create_organization),
            (ProvisioningStep.CREATE_ROLES, self.create_roles),
            (ProvisioningStep.LINK_OWNER, self.link_owner),
            (ProvisioningStep.CREATE_PROFILE, self.create_profile),
        ]

    def provision(self, request: OrganizationSetupRequest) -> ProvisioningResult:
        result = ProvisioningResult()
        current = None

        try:
            for step, action in self.steps():
                current = step.value
                action(request, result)
                result.steps_completed.append(step.value)
                logger.debug(f"Provisioning step completed: {step.value}")

            current = COMMIT
            self.db.commit()
        except AdminAPIError as exc:
            self._abort(current, result, exc)
        except SQLAlchemyError as exc:
            self._abort(current, result, PersistenceError(backend_message(exc)))

        logger.info(
            f"Organization provisioned: {result.organization.id} "
            f"({request.type}) owner={result.owner.id}"
        )
        return result

    def _abort(self, failed_step: str, result: ProvisioningResult, cause: AdminAPIError) -> None:
        self.db.rollback()
        logger.error(
            f"Provisioning failed at step {failed_step}: {cause.message}; "
            f"rolled back {result.steps_completed}"
        )
        raise ProvisioningError(failed_step, result.steps_completed, cause) from cause

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def create_owner_account(self, request: OrganizationSetupRequest, result: ProvisioningResult) -> None:
        result.owner = create_account(
            self.db,
            self.settings,
            request.owner_email,
            request.owner_password,
            user_metadata={"full_name": request.owner_name, "role": "owner"}
        )

    def create_organization(self, request: OrganizationSetupRequest, result: ProvisioningResult) -> None:
        organization = Organization(
            name=request.name,
            type=request.type,
            description=request.description,
            owner_id=result.owner.id,
            address=request.address,
            phone=request.phone,
            email=request.email,
            website=request.website,
            logo_url=request.logo_url,
            settings=settings_for(request.type),
            subscription_tier=request.subscription_tier,
            is_active=True,
            member_count=1
        )
        self.db.add(organization)
        self.db.flush()
        result.organization = organization

    def create_roles(self, request: OrganizationSetupRequest, result: ProvisioningResult) -> None:
        organization_id = result.organization.id
        roles = [
            Role.from_permissions(
                organization_id,
                template["name"],
                template["permissions"],
                description=f"{template['name']} role for {request.type}",
                color=template["color"]
            )
            for template in role_template_for(request.type)
        ]
        self.db.add_all(roles)
        self.db.flush()
        result.roles = roles

    def link_owner(self, request: OrganizationSetupRequest, result: ProvisioningResult) -> None:
        admin_role = find_admin_role(result.roles)
        if admin_role is None:
            raise AdminRoleNotFoundError(result.organization.id)

        member = OrganizationMember(
            organization_id=result.organization.id,
            user_id=result.owner.id,
            role_id=admin_role.id,
            is_active=True
        )
        self.db.add(member)
        self.db.flush()
        result.member = member

    def create_profile(self, request: OrganizationSetupRequest, result: ProvisioningResult) -> None:
        profile = UserProfile(
            user_id=result.owner.id,
            email=result.owner.email,
            account_type=account_type_for(request.type),
            display_name=request.owner_name,
            bio=f"{request.owner_name} - {request.type} owner",
            is_active=True
        )
        self.db.add(profile)
        self.db.flush()
        result.profile = profile


def summarize(result: ProvisioningResult) -> Dict[str, object]:
    return {
        "owner_id": result.owner.id,
        "role_ids": [role.id for role in result.roles],
        "member_id": result.member.id,
        "profile_id": result.profile.id,
        "steps_completed": list(result.steps_completed),
    }
