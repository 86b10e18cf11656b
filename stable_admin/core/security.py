"""
Security Module

Handles password hashing for auth accounts and the signed admin session
token stored in the dashboard cookie.
Uses industry-standard libraries (passlib with bcrypt, python-jose).

SECURITY NOTES:
- Account passwords are hashed with bcrypt
- The admin password is compared in constant time
- The session token is a short-lived JWT, so a leaked cookie expires
"""
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
import hmac

from jose import JWTError, jwt
from passlib.context import CryptContext

from stable_admin.config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ADMIN_SUBJECT = "admin"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify an account password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash an account password using bcrypt."""
    return pwd_context.hash(password)


def check_admin_password(candidate: Optional[str], settings: Settings) -> bool:
    """Compare a login attempt with the shared admin password."""
    if not candidate or not settings.ADMIN_PASSWORD:
        return False
    return hmac.compare_digest(candidate.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))


def create_session_token(settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create the signed token stored in the admin session cookie.

    Payload: sub (always "admin"), iat, exp.
    """
    now = datetime.utcnow()
    expire = now + (expires_delta or timedelta(seconds=settings.SESSION_MAX_AGE_SECONDS))
    payload = {"sub": ADMIN_SUBJECT, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_session_token(token: str, settings: Settings) -> Optional[Dict[str, Any]]:
    """
    Decode and verify a session token.

    Returns the payload if valid, None if invalid, expired or not an
    admin session.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None
    if payload.get("sub") != ADMIN_SUBJECT:
        return None
    return payload
