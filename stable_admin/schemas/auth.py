"""
Authentication Schemas

Request/response models for the admin login gate.
"""
from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Login request body. The dashboard has one shared password."""
    password: str = ""


class LoginResponse(BaseModel):
    success: bool


class SessionStatus(BaseModel):
    authenticated: bool
