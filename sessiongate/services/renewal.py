"""Per-request identity resolution with transparent access-token renewal."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from sessiongate.core.auth import AuthComponents
from sessiongate.core.exceptions import InvalidAccessToken, RefreshExpired, RefreshRevoked
from sessiongate.core.tokens import TokenExpiredError, TokenInvalidError, utcnow
from sessiongate.schemas.auth import Identity
from sessiongate.services.login import access_claims_for
from sessiongate.services.refresh_store import RefreshStore
from sessiongate.services.user_store import UserStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Identity for this request, plus a freshly minted access token when renewal happened."""

    identity: Identity
    access_token: str | None = None


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SessionRenewer:
    """
    Resolve the identity carried by the session cookies.

    A valid access token is trusted as-is. An expired (or absent) access token
    is renewed from the refresh token, provided the stored credential still
    exists and its hash matches. A tampered access token is rejected outright
    and never triggers renewal. The refresh credential is only read here.
    """

    def __init__(self, db: Session, components: AuthComponents) -> None:
        self.users = UserStore(db)
        self.refresh_credentials = RefreshStore(db)
        self.hasher = components.hasher
        self.access_codec = components.access_codec
        self.refresh_codec = components.refresh_codec

    def resolve(self, access_token: str | None, refresh_token: str | None) -> Resolution:
        if not access_token and not refresh_token:
            return Resolution(identity=Identity.anonymous())

        if access_token:
            try:
                claims = self.access_codec.verify(access_token)
            except TokenExpiredError:
                logger.debug("Access token expired; attempting renewal")
            except TokenInvalidError as e:
                logger.warning("Rejected access token: %s", e)
                raise InvalidAccessToken() from e
            else:
                return Resolution(
                    identity=Identity(
                        id=claims.user_id,
                        email=claims.email,
                        name=claims.name,
                        role=claims.role,
                        image=claims.image,
                    )
                )

        if not refresh_token:
            return Resolution(identity=Identity.anonymous())
        return self._renew(refresh_token)

    def _renew(self, refresh_token: str) -> Resolution:
        try:
            claims = self.refresh_codec.verify(refresh_token)
        except TokenExpiredError as e:
            logger.info("Renewal refused: refresh token expired")
            raise RefreshExpired() from e
        except TokenInvalidError as e:
            logger.warning("Renewal refused: %s", e)
            raise RefreshRevoked() from e

        stored = self.refresh_credentials.get_for_user(claims.user_id)
        if stored is None:
            logger.info("Renewal refused for user_id=%s: no stored credential", claims.user_id)
            raise RefreshRevoked()
        if _as_utc(stored.expires_at) <= utcnow():
            logger.info("Renewal refused for user_id=%s: stored credential expired", claims.user_id)
            raise RefreshExpired()
        if not self.hasher.verify(refresh_token, stored.token_hash):
            logger.warning("Renewal refused for user_id=%s: hash mismatch", claims.user_id)
            raise RefreshRevoked()

        # Reload so role, name and image changes since login are picked up.
        user = self.users.get_by_id(stored.user_id)
        if user is None:
            logger.warning("Renewal refused for user_id=%s: user not found", claims.user_id)
            raise RefreshRevoked()
        if user.is_blocked:
            logger.warning(
                "Renewal refused for user_id=%s: status=%s", user.id, user.status
            )
            raise RefreshRevoked()

        access_claims = access_claims_for(user)
        access_token = self.access_codec.sign(access_claims)
        logger.info("Access token renewed for user_id=%s", user.id)
        return Resolution(
            identity=Identity(
                id=user.id,
                email=user.email,
                name=user.name,
                role=user.role,
                image=user.image,
            ),
            access_token=access_token,
        )
