"""Long-lived auth collaborators, built once per application."""

from dataclasses import dataclass

from sessiongate.core.config import Settings
from sessiongate.core.security import SecretHasher
from sessiongate.core.tokens import (
    AccessClaims,
    RefreshClaims,
    TokenCodec,
    build_access_codec,
    build_refresh_codec,
)


@dataclass(frozen=True)
class AuthComponents:
    hasher: SecretHasher
    access_codec: TokenCodec[AccessClaims]
    refresh_codec: TokenCodec[RefreshClaims]


def build_auth_components(settings: Settings) -> AuthComponents:
    """Create the hasher and both token codecs from settings."""
    return AuthComponents(
        hasher=SecretHasher(rounds=settings.BCRYPT_ROUNDS),
        access_codec=build_access_codec(settings),
        refresh_codec=build_refresh_codec(settings),
    )
