"""Pydantic request/response schemas."""

from sessiongate.schemas.auth import (
    ErrorResponse,
    Identity,
    IdentityResponse,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserOut,
    UserResponse,
)
from sessiongate.schemas.health import HealthResponse

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "Identity",
    "IdentityResponse",
    "LoginRequest",
    "MessageResponse",
    "SignupRequest",
    "UserOut",
    "UserResponse",
]
