"""
Permission Templates

Every new organization gets a fixed set of four roles chosen by its type.
The first role of each set is the administrative one; the provisioning
workflow links the owner to it.

DESIGN: permissions are plain capability strings stored on the role.
Four of them also drive boolean flags on the Role row (see
models.role.CAPABILITY_FLAGS) so clients can filter without parsing lists.
"""
from typing import Dict, List, Sequence, TypedDict

from stable_admin.models.organization import OrganizationType


class RoleTemplate(TypedDict):
    name: str
    permissions: List[str]
    color: str


BLUE = "#007AFF"
GREEN = "#34C759"
ORANGE = "#FF9500"
PURPLE = "#AF52DE"

_ORGANIZATION_ROLES: List[RoleTemplate] = [
    {"name": "Administrator", "permissions": ["manage_organization", "manage_horses", "assign_tasks", "view_all"], "color": BLUE},
    {"name": "Manager", "permissions": ["manage_horses", "assign_tasks", "view_all"], "color": GREEN},
    {"name": "Staff", "permissions": ["view_assigned", "update_tasks"], "color": ORANGE},
    {"name": "Veterinarian", "permissions": ["view_all", "manage_medical"], "color": PURPLE},
]

DEFAULT_ROLES: Dict[str, List[RoleTemplate]] = {
    OrganizationType.ORGANIZATION.value: _ORGANIZATION_ROLES,
    OrganizationType.TRAINER.value: [
        {"name": "Head Trainer", "permissions": ["manage_organization", "manage_horses", "assign_tasks", "view_all"], "color": BLUE},
        {"name": "Trainer", "permissions": ["manage_horses", "assign_tasks", "view_assigned"], "color": GREEN},
        {"name": "Assistant Trainer", "permissions": ["view_assigned", "update_tasks"], "color": ORANGE},
        {"name": "Client", "permissions": ["view_own_horses"], "color": PURPLE},
    ],
    OrganizationType.STABLE.value: [
        {"name": "Stable Owner", "permissions": ["manage_organization", "manage_horses", "assign_tasks", "view_all"], "color": BLUE},
        {"name": "Stable Manager", "permissions": ["manage_horses", "assign_tasks", "view_all"], "color": GREEN},
        {"name": "Staff", "permissions": ["view_assigned", "update_tasks"], "color": ORANGE},
        {"name": "Boarder", "permissions": ["view_own_horses"], "color": PURPLE},
    ],
    OrganizationType.ENTERPRISE.value: _ORGANIZATION_ROLES,
}

# Names that mark the owner's role, in lookup order
ADMIN_ROLE_NAMES = ("Administrator", "Head Trainer", "Stable Owner")


def role_template_for(organization_type: str) -> List[RoleTemplate]:
    """
    Return a copy of the default roles for an organization type.

    Unknown types fall back to the generic organization set.
    """
    template = DEFAULT_ROLES.get(organization_type, DEFAULT_ROLES[OrganizationType.ORGANIZATION.value])
    return [
        {"name": role["name"], "permissions": list(role["permissions"]), "color": role["color"]}
        for role in template
    ]


def find_admin_role(roles: Sequence):
    """
    Pick the administrative role out of a generated role set.

    Works on anything with a .name attribute. Returns None when the set
    has no administrative role.
    """
    for role in roles:
        if role.name in ADMIN_ROLE_NAMES:
            return role
    return None


def settings_for(organization_type: str) -> Dict[str, object]:
    """Initial settings blob for a new organization."""
    if organization_type == OrganizationType.TRAINER.value:
        return {
            "is_trainer": True,
            "accepts_training_requests": True,
            "training_specializations": [],
        }
    return {}


def account_type_for(organization_type: str) -> str:
    """Profile account type of an organization's owner."""
    return "trainer" if organization_type == OrganizationType.TRAINER.value else "organization"
