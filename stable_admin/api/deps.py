"""
API Dependencies

Reusable FastAPI dependencies shared by the routers. Settings and the
database client are looked up on the running application, so a test can
build an app with its own Settings and nothing leaks between instances.
"""
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from stable_admin.config import Settings
from stable_admin.core.exceptions import AuthenticationError, NotFoundError
from stable_admin.core.security import decode_session_token
from stable_admin.models.organization import Organization

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_admin_session(
    request: Request,
    settings: Settings = Depends(get_app_settings)
) -> dict:
    """
    Return the decoded admin session.

    AdminSessionMiddleware normally sets it already; decoding again keeps
    routers usable when mounted without the middleware.
    """
    session = getattr(request.state, "admin_session", None)
    if session:
        return session

    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    session = decode_session_token(token, settings) if token else None
    if not session:
        raise AuthenticationError("A valid admin session is required")
    return session


def get_organization_or_404(organization_id: Optional[str], db: Session) -> Organization:
    organization = db.query(Organization).filter(Organization.id == organization_id).first()
    if not organization:
        raise NotFoundError("Organization", organization_id or "")
    return organization
