"""
Authentication Endpoints

The dashboard is gated by one shared admin password. A successful login
sets an HttpOnly cookie holding a signed, expiring session token.
"""
from fastapi import APIRouter, Depends, Request, Response

from stable_admin.api.deps import get_app_settings
from stable_admin.config import Settings
from stable_admin.core.exceptions import AuthenticationError
from stable_admin.core.security import check_admin_password, create_session_token, decode_session_token
from stable_admin.schemas.auth import LoginRequest, LoginResponse, SessionStatus
from stable_admin.utils.logging import log_security_event, get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    settings: Settings = Depends(get_app_settings)
):
    """
    Check the admin password and start a session.

    Wrong or missing password: 401 and no cookie.
    """
    if not check_admin_password(credentials.password, settings):
        log_security_event(
            logger,
            "failed_login",
            reason="invalid_password",
            client=request.client.host if request.client else "unknown"
        )
        raise AuthenticationError("Invalid password")

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_token(settings),
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.is_production,
        samesite="strict"
    )

    logger.info("Admin session started")
    return LoginResponse(success=True)


@router.post("/logout", response_model=LoginResponse)
async def logout(
    response: Response,
    settings: Settings = Depends(get_app_settings)
):
    """End the admin session by clearing the cookie."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=settings.is_production,
        samesite="strict"
    )
    return LoginResponse(success=True)


@router.get("/session", response_model=SessionStatus)
async def session_status(
    request: Request,
    settings: Settings = Depends(get_app_settings)
):
    """Report whether the caller holds a valid session."""
    token = request.cookies.get(settings.SESSION_COOKIE_NAME)
    authenticated = bool(token and decode_session_token(token, settings))
    return SessionStatus(authenticated=authenticated)
