"""Unit tests for default role templates."""
from types import SimpleNamespace

import pytest

from stable_admin.core.permissions import (
    DEFAULT_ROLES,
    account_type_for,
    find_admin_role,
    role_template_for,
    settings_for,
)
from stable_admin.models.role import Role


class TestRoleTemplates:
    """Tests for role_template_for."""

    def test_trainer_roles(self):
        names = [role["name"] for role in role_template_for("trainer")]

        assert names == ["Head Trainer", "Trainer", "Assistant Trainer", "Client"]

    def test_trainer_permissions_and_colors(self):
        assert role_template_for("trainer") == [
            {"name": "Head Trainer", "permissions": ["manage_organization", "manage_horses", "assign_tasks", "view_all"], "color": "#007AFF"},
            {"name": "Trainer", "permissions": ["manage_horses", "assign_tasks", "view_assigned"], "color": "#34C759"},
            {"name": "Assistant Trainer", "permissions": ["view_assigned", "update_tasks"], "color": "#FF9500"},
            {"name": "Client", "permissions": ["view_own_horses"], "color": "#AF52DE"},
        ]

    def test_stable_roles(self):
        names = [role["name"] for role in role_template_for("stable")]

        assert names == ["Stable Owner", "Stable Manager", "Staff", "Boarder"]

    @pytest.mark.parametrize("organization_type", ["organization", "enterprise", "circus"])
    def test_generic_roles_and_fallback(self, organization_type):
        names = [role["name"] for role in role_template_for(organization_type)]

        assert names == ["Administrator", "Manager", "Staff", "Veterinarian"]

    def test_every_template_has_four_roles_and_an_admin(self):
        for organization_type in DEFAULT_ROLES:
            roles = [SimpleNamespace(**role) for role in role_template_for(organization_type)]

            assert len(roles) == 4
            assert find_admin_role(roles) is roles[0]

    def test_template_is_a_copy(self):
        template = role_template_for("stable")
        template[0]["permissions"].append("launch_rockets")

        assert "launch_rockets" not in role_template_for("stable")[0]["permissions"]

    def test_admin_role_missing(self):
        roles = [SimpleNamespace(name="Groom"), SimpleNamespace(name="Rider")]

        assert find_admin_role(roles) is None


class TestOrganizationDefaults:
    """Tests for per-type settings and profile account types."""

    def test_trainer_settings(self):
        assert settings_for("trainer") == {
            "is_trainer": True,
            "accepts_training_requests": True,
            "training_specializations": [],
        }

    def test_other_types_start_empty(self):
        assert settings_for("stable") == {}

    def test_account_type(self):
        assert account_type_for("trainer") == "trainer"
        assert account_type_for("stable") == "organization"
        assert account_type_for("enterprise") == "organization"


class TestCapabilityFlags:
    """Tests for Role.from_permissions."""

    def test_flags_follow_permissions(self):
        role = Role.from_permissions("org-1", "Manager", ["manage_horses", "assign_tasks", "view_all"])

        assert role.can_manage_horses is True
        assert role.can_assign_tasks is True
        assert role.can_view_all_horses is True
        assert role.can_manage_organization is False

    def test_unknown_permissions_set_no_flags(self):
        role = Role.from_permissions("org-1", "Client", ["view_own_horses"], color="#AF52DE")

        assert role.permissions == ["view_own_horses"]
        assert role.color == "#AF52DE"
        assert not any([
            role.can_manage_horses,
            role.can_assign_tasks,
            role.can_view_all_horses,
            role.can_manage_organization,
        ])
