"""Credential verification and session establishment (login)."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sessiongate.core.auth import AuthComponents
from sessiongate.core.exceptions import (
    AccountInactive,
    InternalError,
    InvalidCredentials,
    ValidationError,
)
from sessiongate.core.tokens import AccessClaims, RefreshClaims, utcnow
from sessiongate.models import User
from sessiongate.schemas.auth import normalize_email
from sessiongate.services.refresh_store import RefreshStore
from sessiongate.services.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user: User
    access_token: str
    refresh_token: str


def access_claims_for(user: User) -> AccessClaims:
    """Build access-token claims from the current user row."""
    return AccessClaims(
        user_id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        image=user.image,
    )


class CredentialIssuer:
    """
    Authenticate email/password and establish a session.

    On success the user's previous refresh credential (if any) is replaced and
    the login metadata is updated in a single transaction; on storage failure
    nothing is written.
    """

    def __init__(self, db: Session, components: AuthComponents) -> None:
        self.db = db
        self.users = UserStore(db)
        self.refresh_credentials = RefreshStore(db)
        self.hasher = components.hasher
        self.access_codec = components.access_codec
        self.refresh_codec = components.refresh_codec

    def login(self, email: str, password: str, client_ip: str | None = None) -> LoginResult:
        email = normalize_email(email)
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.users.get_by_email(email)
        if user is None:
            logger.info("Login failed: unknown email")
            raise InvalidCredentials()
        if user.is_blocked:
            logger.warning("Login refused for user_id=%s: status=%s", user.id, user.status)
            raise AccountInactive()
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Login failed for user_id=%s: password mismatch", user.id)
            raise InvalidCredentials()

        user_id = user.id
        now = utcnow()
        access_token = self.access_codec.sign(access_claims_for(user), now=now)
        refresh_token = self.refresh_codec.sign(RefreshClaims.new(user.id, user.email), now=now)
        token_hash = self.hasher.hash(refresh_token)

        try:
            self.refresh_credentials.replace(
                user_id,
                token_hash,
                created_at=now,
                expires_at=now + self.refresh_codec.ttl,
            )
            self.users.record_login(user, client_ip, now)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception("Login transaction failed for user_id=%s", user_id)
            raise InternalError() from e

        logger.info("Login succeeded for user_id=%s login_count=%s", user_id, user.login_count)
        return LoginResult(user=user, access_token=access_token, refresh_token=refresh_token)
