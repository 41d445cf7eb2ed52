"""Request/response schemas for auth endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sessiongate.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class LoginRequest(BaseModel):
    """Credentials for login. Both fields are required and non-empty."""

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def normalize(cls, v: str) -> str:
        email = normalize_email(v)
        if not email:
            raise ValueError("Email is required")
        return email


class SignupRequest(BaseModel):
    """New account details."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LEN)
    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LEN)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        name = v.strip()
        if not name:
            raise ValueError("Name is required")
        return name

    @field_validator("email")
    @classmethod
    def normalize(cls, v: str) -> str:
        email = normalize_email(v)
        if "@" not in email:
            raise ValueError("Email must contain '@'")
        return email


class UserOut(BaseModel):
    """User as returned to clients: no password hash, no session secrets."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    status: str
    image: str | None = None
    last_login_at: datetime | None = None
    last_login_ip: str | None = None
    login_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Identity(BaseModel):
    """Authenticated identity attached to each request; all fields null when anonymous."""

    id: int | None = None
    email: str | None = None
    name: str | None = None
    role: str | None = None
    image: str | None = None

    @classmethod
    def anonymous(cls) -> "Identity":
        return cls()

    @property
    def is_authenticated(self) -> bool:
        return self.id is not None


class UserResponse(BaseModel):
    """Envelope for login and signup responses."""

    data: UserOut
    message: str
    status: Literal["ok"] = "ok"


class IdentityResponse(BaseModel):
    data: Identity


class MessageResponse(BaseModel):
    message: str
    status: Literal["ok"] = "ok"


class ErrorResponse(BaseModel):
    """Body of every error response."""

    status: int
    code: str
    message: str
