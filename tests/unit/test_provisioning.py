"""Unit tests for the organization provisioning workflow.

Runs OrganizationProvisioner directly against an in-memory database.
"""
import pytest

from stable_admin.core.exceptions import AccountCreationError, ProvisioningError
from stable_admin.models import AuthAccount, Organization, OrganizationMember, Role, UserProfile
from stable_admin.schemas.organization import OrganizationSetupRequest
from stable_admin.services.accounts import create_account
from stable_admin.services.provisioning import OrganizationProvisioner, ProvisioningStep, summarize


def setup_request(**overrides) -> OrganizationSetupRequest:
    values = {
        "name": "Hilltop Training",
        "type": "trainer",
        "owner_email": "coach@hilltop.example",
        "owner_name": "Sam Coach",
        "owner_password": "securepassword123",
    }
    values.update(overrides)
    return OrganizationSetupRequest(**values)


def counts(session):
    return {
        "accounts": session.query(AuthAccount).count(),
        "organizations": session.query(Organization).count(),
        "roles": session.query(Role).count(),
        "members": session.query(OrganizationMember).count(),
        "profiles": session.query(UserProfile).count(),
    }


class TestProvisioningSuccess:
    """Tests for a complete provisioning run."""

    def test_writes_every_record(self, db_session, settings):
        result = OrganizationProvisioner(db_session, settings).provision(setup_request())

        assert counts(db_session) == {
            "accounts": 1,
            "organizations": 1,
            "roles": 4,
            "members": 1,
            "profiles": 1,
        }
        assert result.steps_completed == [step.value for step in ProvisioningStep]

    def test_trainer_organization(self, db_session, settings):
        result = OrganizationProvisioner(db_session, settings).provision(setup_request())

        assert {role.name for role in result.roles} == {
            "Head Trainer", "Trainer", "Assistant Trainer", "Client"
        }
        assert result.organization.settings["is_trainer"] is True
        assert result.organization.owner_id == result.owner.id
        assert result.organization.member_count == 1

    def test_owner_linked_to_admin_role(self, db_session, settings):
        result = OrganizationProvisioner(db_session, settings).provision(setup_request())

        admin_role = db_session.query(Role).filter(Role.id == result.member.role_id).one()
        assert admin_role.name == "Head Trainer"
        assert admin_role.can_manage_organization is True
        assert result.member.is_active is True

    def test_role_descriptions_and_profile(self, db_session, settings):
        result = OrganizationProvisioner(db_session, settings).provision(
            setup_request(type="stable", owner_name="Jane Rider")
        )

        assert result.roles[0].description == "Stable Owner role for stable"
        assert result.profile.account_type == "organization"
        assert result.profile.display_name == "Jane Rider"
        assert result.profile.bio == "Jane Rider - stable owner"
        assert result.profile.email == "coach@hilltop.example"

    def test_summary(self, db_session, settings):
        result = OrganizationProvisioner(db_session, settings).provision(setup_request())

        summary = summarize(result)

        assert summary["owner_id"] == result.owner.id
        assert len(summary["role_ids"]) == 4
        assert summary["steps_completed"][-1] == "create_profile"


class TestProvisioningRollback:
    """Tests for failure handling."""

    def test_duplicate_owner_email_rolls_back(self, db_session, settings):
        create_account(db_session, settings, "coach@hilltop.example", "password123")
        db_session.commit()

        with pytest.raises(ProvisioningError) as exc_info:
            OrganizationProvisioner(db_session, settings).provision(setup_request())

        error = exc_info.value
        assert error.failed_step == "create_owner_account"
        assert error.rolled_back == []
        assert error.status_code == 409
        assert isinstance(error.cause, AccountCreationError)
        assert counts(db_session)["organizations"] == 0
        assert counts(db_session)["accounts"] == 1

    def test_failure_mid_workflow_undoes_earlier_steps(self, db_session, settings, monkeypatch):
        provisioner = OrganizationProvisioner(db_session, settings)

        def broken_link_owner(request, result):
            raise AccountCreationError("simulated failure", status_code=500)

        monkeypatch.setattr(provisioner, "link_owner", broken_link_owner)

        with pytest.raises(ProvisioningError) as exc_info:
            provisioner.provision(setup_request())

        error = exc_info.value
        assert error.failed_step == "link_owner"
        assert error.rolled_back == ["create_owner_account", "create_organization", "create_roles"]
        assert "simulated failure" in error.message
        assert counts(db_session) == {
            "accounts": 0,
            "organizations": 0,
            "roles": 0,
            "members": 0,
            "profiles": 0,
        }

    def test_short_owner_password(self, db_session, settings):
        with pytest.raises(ProvisioningError) as exc_info:
            OrganizationProvisioner(db_session, settings).provision(setup_request(owner_password="abc"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.errors == ["Password should be at least 6 characters"]
