"""Signed bearer tokens: one codec class, instantiated for access and refresh tokens."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import jwt
from pydantic import BaseModel

if TYPE_CHECKING:
    from sessiongate.core.config import Settings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

REQUIRED_CLAIMS = ["exp", "iat", "sub"]


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Signature is authentic but the token is past its exp claim."""


class TokenInvalidError(TokenError):
    """Bad signature, malformed token, missing claims or wrong token type."""


def utcnow() -> datetime:
    """Current UTC time truncated to whole seconds (JWT timestamps are integers)."""
    return datetime.now(UTC).replace(microsecond=0)


def _timestamp(payload: dict[str, Any], name: str) -> datetime:
    return datetime.fromtimestamp(int(payload[name]), tz=UTC)


class AccessClaims(BaseModel):
    """Identity carried by an access token. Never persisted."""

    user_id: int
    email: str
    name: str | None = None
    role: str | None = None
    image: str | None = None
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "sub": str(self.user_id),
            "email": self.email,
            "name": self.name,
            "role": self.role,
            "image": self.image,
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AccessClaims":
        return cls(
            user_id=int(payload["sub"]),
            email=payload["email"],
            name=payload.get("name"),
            role=payload.get("role"),
            image=payload.get("image"),
            issued_at=_timestamp(payload, "iat"),
            expires_at=_timestamp(payload, "exp"),
        )


class RefreshClaims(BaseModel):
    """Claims of a refresh token. token_id makes every issued token unique."""

    user_id: int
    email: str
    token_id: str
    issued_at: datetime | None = None
    expires_at: datetime | None = None

    @classmethod
    def new(cls, user_id: int, email: str) -> "RefreshClaims":
        return cls(user_id=user_id, email=email, token_id=secrets.token_hex(16))

    def to_payload(self) -> dict[str, Any]:
        return {"sub": str(self.user_id), "email": self.email, "jti": self.token_id}

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "RefreshClaims":
        return cls(
            user_id=int(payload["sub"]),
            email=payload["email"],
            token_id=payload["jti"],
            issued_at=_timestamp(payload, "iat"),
            expires_at=_timestamp(payload, "exp"),
        )


ClaimsT = TypeVar("ClaimsT", AccessClaims, RefreshClaims)


class TokenCodec(Generic[ClaimsT]):
    """
    Sign and verify one class of token with its own secret and TTL.

    verify() raises TokenExpiredError only for authentic tokens past expiry;
    every other failure is TokenInvalidError, so callers can tell
    "renew" apart from "reject".
    """

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str,
        ttl: timedelta,
        token_type: str,
        claims_model: type[ClaimsT],
    ) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl
        self.token_type = token_type
        self._claims_model = claims_model

    def sign(self, claims: ClaimsT, now: datetime | None = None) -> str:
        issued_at = (now or utcnow()).replace(microsecond=0)
        payload = claims.to_payload()
        payload.update(
            type=self.token_type,
            iat=issued_at,
            exp=issued_at + self.ttl,
        )
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> ClaimsT:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError(f"{self.token_type} token has expired") from e
        except jwt.PyJWTError as e:
            raise TokenInvalidError(f"Invalid {self.token_type} token: {e}") from e

        if payload.get("type") != self.token_type:
            raise TokenInvalidError(f"Token is not a {self.token_type} token")
        try:
            return self._claims_model.from_payload(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise TokenInvalidError(f"Invalid {self.token_type} token payload") from e


def build_access_codec(settings: "Settings") -> TokenCodec[AccessClaims]:
    return TokenCodec(
        secret=settings.ACCESS_TOKEN_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        token_type=ACCESS_TOKEN_TYPE,
        claims_model=AccessClaims,
    )


def build_refresh_codec(settings: "Settings") -> TokenCodec[RefreshClaims]:
    return TokenCodec(
        secret=settings.REFRESH_TOKEN_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        token_type=REFRESH_TOKEN_TYPE,
        claims_model=RefreshClaims,
    )
