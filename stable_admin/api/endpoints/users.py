"""
User Endpoints

Auth accounts of platform users. Creating a user here does not attach it
to any organization; see /organization-members/assign for that.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from stable_admin.api.deps import get_app_settings
from stable_admin.config import Settings
from stable_admin.database import get_db, commit_or_raise
from stable_admin.models.account import AuthAccount
from stable_admin.schemas.user import (
    UserCreate,
    UserEnvelope,
    UserListResponse,
    UserResponse,
)
from stable_admin.services.accounts import create_account
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserListResponse)
async def list_users(db: Session = Depends(get_db)):
    """List all auth accounts, newest first."""
    accounts = db.query(AuthAccount).order_by(AuthAccount.created_at.desc()).all()
    return UserListResponse(users=[UserResponse.model_validate(a) for a in accounts])


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings)
):
    """
    Create an auth account.

    Duplicate emails are rejected with 409, short passwords with 400.
    """
    account = create_account(
        db,
        settings,
        user_data.email,
        user_data.password,
        user_metadata={"full_name": user_data.full_name, "phone": user_data.phone}
    )
    commit_or_raise(db, "create user")

    logger.info(f"User created: {account.id}")
    return UserEnvelope(user=UserResponse.model_validate(account))
