"""
Custom Exceptions

Centralized exception definitions for better error handling.
main.py renders every AdminAPIError as
{"success": false, "message": ..., "errors": [...], "type": ...}.
"""
from typing import List, Optional

from fastapi import HTTPException, status


class AdminAPIError(HTTPException):
    """Base class carrying an itemized error list next to the message."""

    error_type = "error"

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: Optional[List[str]] = None,
        headers: Optional[dict] = None
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.errors = list(errors) if errors else [message]

    @property
    def message(self) -> str:
        return self.detail


class ValidationError(AdminAPIError):
    """Raised when a payload fails validation. Nothing is written."""

    error_type = "validation_error"

    def __init__(self, errors: List[str], message: str = "Validation errors found"):
        super().__init__(status.HTTP_400_BAD_REQUEST, message, errors)


class AuthenticationError(AdminAPIError):
    """Raised when the admin password or session cookie is wrong or missing."""

    error_type = "authentication_error"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(status.HTTP_401_UNAUTHORIZED, message)


class NotFoundError(AdminAPIError):
    """Raised on a lookup miss."""

    error_type = "not_found"

    def __init__(self, entity: str, identifier: str = ""):
        message = f"{entity} not found: {identifier}" if identifier else f"{entity} not found"
        super().__init__(status.HTTP_404_NOT_FOUND, message)


class AdminRoleNotFoundError(NotFoundError):
    """
    Raised when a generated role set contains no administrative role.

    Guards an internal precondition of provisioning, not user input.
    """

    def __init__(self, organization_id: str = ""):
        super().__init__("Admin role", organization_id)


class AccountCreationError(AdminAPIError):
    """Raised when an auth account cannot be created (duplicate email, weak password)."""

    error_type = "account_creation_error"

    def __init__(self, message: str, status_code: int = status.HTTP_409_CONFLICT):
        super().__init__(status_code, message)


class BackendError(AdminAPIError):
    """
    Raised when the database rejects or fails an operation.

    The underlying message is passed through to the caller.
    """

    error_type = "backend_error"

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, message, errors)


class PersistenceError(BackendError):
    """Raised when a write violates a database constraint."""

    error_type = "persistence_error"


class ProvisioningError(AdminAPIError):
    """
    Raised when the organization provisioning workflow fails.

    Keeps the status code of the step's own error. Every step listed in
    rolled_back was undone with the transaction.
    """

    error_type = "provisioning_error"

    def __init__(self, failed_step: str, rolled_back: List[str], cause: AdminAPIError):
        super().__init__(
            cause.status_code,
            f"Failed to create organization at step '{failed_step}': {cause.message}",
            cause.errors
        )
        self.failed_step = failed_step
        self.rolled_back = list(rolled_back)
        self.cause = cause


def backend_message(exc: Exception) -> str:
    """Message of the driver error underneath a SQLAlchemy exception."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)
