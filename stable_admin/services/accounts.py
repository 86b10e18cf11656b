"""
Auth Account Service

Creates the authentication record of a platform user. Used by the /users
endpoint and by organization provisioning. Callers own the transaction:
this module only flushes.
"""
from typing import Any, Dict, Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stable_admin.config import Settings
from stable_admin.core.exceptions import AccountCreationError
from stable_admin.core.security import get_password_hash
from stable_admin.models.account import AuthAccount
from stable_admin.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def create_account(
    db: Session,
    settings: Settings,
    email: str,
    password: str,
    user_metadata: Optional[Dict[str, Any]] = None
) -> AuthAccount:
    """
    Create an auth account.

    Raises AccountCreationError when the password is too short or the
    email is already registered.
    """
    email = normalize_email(email)

    if len(password or "") < settings.PASSWORD_MIN_LENGTH:
        raise AccountCreationError(
            f"Password should be at least {settings.PASSWORD_MIN_LENGTH} characters",
            status_code=status.HTTP_400_BAD_REQUEST
        )

    existing = db.query(AuthAccount).filter(AuthAccount.email == email).first()
    if existing:
        raise AccountCreationError("A user with this email address has already been registered")

    account = AuthAccount(
        email=email,
        hashed_password=get_password_hash(password),
        # Drop empty values so metadata only holds what was supplied
        user_metadata={k: v for k, v in (user_metadata or {}).items() if v is not None},
        email_confirmed=True
    )
    db.add(account)
    try:
        db.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent insert of the same email
        raise AccountCreationError("A user with this email address has already been registered") from exc

    logger.info(f"Auth account created: {account.id}")
    return account
