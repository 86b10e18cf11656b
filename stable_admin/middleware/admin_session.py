"""
Admin Session Middleware

Gates the whole dashboard API behind the signed admin session cookie set
by POST /auth/login. Requests without a valid cookie get a 401 in the
uniform error shape before any handler or database work runs.
"""
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from typing import Optional
import logging

from stable_admin.config import Settings
from stable_admin.core.security import decode_session_token
from stable_admin.utils.logging import log_security_event

logger = logging.getLogger(__name__)

# Reachable without a session
PUBLIC_PATHS = (
    "/docs",
    "/redoc",
    "/openapi.json",
    "/health",
    "/auth/login",
    "/auth/logout",
    "/auth/session",
)


class AdminSessionMiddleware(BaseHTTPMiddleware):
    """
    Middleware to verify the admin session cookie.

    On success the decoded token is available as request.state.admin_session.
    """

    def __init__(self, app, settings: Settings):
        super().__init__(app)
        self.settings = settings
        self.excluded_paths = PUBLIC_PATHS

    async def dispatch(self, request: Request, call_next):
        """Reject requests that carry no valid session."""
        path = request.url.path
        if path == "/" or any(_is_under(path, excluded) for excluded in self.excluded_paths):
            return await call_next(request)

        token = request.cookies.get(self.settings.SESSION_COOKIE_NAME)
        session = self._load_session(token)

        if session is None:
            if token:
                log_security_event(logger, "invalid_session", path=path, client=_client_host(request))
            return JSONResponse(
                status_code=401,
                content={
                    "success": False,
                    "message": "Not authenticated",
                    "errors": ["A valid admin session is required"],
                    "type": "authentication_error"
                }
            )

        request.state.admin_session = session
        return await call_next(request)

    def _load_session(self, token: Optional[str]) -> Optional[dict]:
        if not token:
            return None
        return decode_session_token(token, self.settings)


def _client_host(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _is_under(path: str, prefix: str) -> bool:
    """True for the prefix itself and its subpaths, not for /healthz-style lookalikes."""
    return path == prefix or path.startswith(prefix + "/")
