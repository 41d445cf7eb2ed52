"""Login, logout, signup and current-identity endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from sessiongate.api.cookies import clear_session_cookies, set_session_cookies
from sessiongate.api.deps import get_app_settings, get_auth_components, require_identity
from sessiongate.core.auth import AuthComponents
from sessiongate.core.config import Settings
from sessiongate.core.database import get_db
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
from sessiongate.services.login import CredentialIssuer
from sessiongate.services.logout import RevocationHandler
from sessiongate.services.registration import register_user

router = APIRouter()


@router.post(
    "/login",
    response_model=UserResponse,
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    components: Annotated[AuthComponents, Depends(get_auth_components)],
) -> UserResponse:
    """
    Authenticate with email and password.

    Sets the httpOnly `token` (access) and `refreshToken` cookies and replaces
    any earlier session of the same user.
    """
    client_ip = request.client.host if request.client else None
    result = CredentialIssuer(db, components).login(body.email, body.password, client_ip)
    set_session_cookies(response, result.access_token, result.refresh_token, settings)
    return UserResponse(
        data=UserOut.model_validate(result.user),
        message="Login successful",
    )


@router.post(
    "/logout",
    response_model=MessageResponse,
    responses={401: {"model": ErrorResponse}},
)
def logout(
    response: Response,
    identity: Annotated[Identity, Depends(require_identity)],
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> MessageResponse:
    """Revoke the current session and clear both cookies."""
    RevocationHandler(db).logout(identity)
    clear_session_cookies(response, settings)
    return MessageResponse(message="Logout successful")


@router.post(
    "/signup",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
    components: Annotated[AuthComponents, Depends(get_auth_components)],
) -> UserResponse:
    """Create a new account. It starts Pending and cannot log in until activated."""
    user = register_user(db, components.hasher, body)
    return UserResponse(data=UserOut.model_validate(user), message="User created successfully")


@router.get("/me", response_model=IdentityResponse, responses={401: {"model": ErrorResponse}})
def me(identity: Annotated[Identity, Depends(require_identity)]) -> IdentityResponse:
    """Return the identity attached to this request."""
    return IdentityResponse(data=identity)
