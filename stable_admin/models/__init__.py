"""
Database Models

Every tenant-owned row carries organization_id (horses and consumables may
instead, or also, carry user_id).
"""
from stable_admin.models.account import AuthAccount
from stable_admin.models.profile import UserProfile, AccountType
from stable_admin.models.organization import Organization, OrganizationType
from stable_admin.models.role import Role
from stable_admin.models.member import OrganizationMember
from stable_admin.models.horse import Horse, HorseGender, HorseStatus
from stable_admin.models.consumable import Consumable, ConsumableType
from stable_admin.models.transaction_type import (
    TransactionType,
    TransactionCategory,
    UnitType,
    BillingFrequency,
)

__all__ = [
    "AuthAccount",
    "UserProfile",
    "AccountType",
    "Organization",
    "OrganizationType",
    "Role",
    "OrganizationMember",
    "Horse",
    "HorseGender",
    "HorseStatus",
    "Consumable",
    "ConsumableType",
    "TransactionType",
    "TransactionCategory",
    "UnitType",
    "BillingFrequency",
]
