"""Shared dependencies: app-scoped services, identity resolution and the identity guard."""

from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from sessiongate.api.cookies import set_access_cookie
from sessiongate.core.auth import AuthComponents
from sessiongate.core.config import Settings
from sessiongate.core.database import get_db
from sessiongate.core.exceptions import Unauthorized
from sessiongate.schemas.auth import Identity
from sessiongate.services.renewal import SessionRenewer


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_components(request: Request) -> AuthComponents:
    return request.app.state.auth


def resolve_identity(
    request: Request,
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    components: Annotated[AuthComponents, Depends(get_auth_components)],
) -> Identity:
    """
    Dependency: attach the request identity from the session cookies.

    Requests without session cookies get an anonymous identity. When the access
    token has expired, a new one is minted from the refresh token and set on
    this same response. Tampered access tokens raise 401; refused renewals 403.
    """
    renewer = SessionRenewer(db, components)
    resolution = renewer.resolve(
        request.cookies.get(settings.ACCESS_COOKIE_NAME),
        request.cookies.get(settings.REFRESH_COOKIE_NAME),
    )
    if resolution.access_token:
        set_access_cookie(response, resolution.access_token, settings)
    request.state.identity = resolution.identity
    return resolution.identity


def require_identity(
    identity: Annotated[Identity, Depends(resolve_identity)],
) -> Identity:
    """Dependency: require an authenticated identity. Raises 401 when anonymous."""
    if not identity.is_authenticated:
        raise Unauthorized()
    return identity
