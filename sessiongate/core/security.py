"""One-way hashing for passwords and refresh-token secrets."""

import base64
import hashlib

import bcrypt

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
DEFAULT_BCRYPT_ROUNDS = 12

# Min/max lengths for email, name and password validation.
EMAIL_MAX_LEN = 255
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


class SecretHasher:
    """
    Salted bcrypt hashing used for both passwords and refresh tokens.

    Secrets are reduced with SHA-256 (base64-encoded, 44 bytes) before bcrypt so
    the whole secret counts: bcrypt ignores everything past 72 bytes, and signed
    refresh tokens of the same user share a much longer common prefix.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self.rounds = rounds

    @staticmethod
    def _prehash(secret: str) -> bytes:
        digest = hashlib.sha256(secret.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash(self, secret: str) -> str:
        """Hash a secret for storage. A new salt is drawn on every call."""
        return bcrypt.hashpw(
            self._prehash(secret), bcrypt.gensalt(rounds=self.rounds)
        ).decode("utf-8")

    def verify(self, secret: str, digest: str | None) -> bool:
        """Verify a secret against a stored digest; malformed digests never match."""
        if not secret or not digest:
            return False
        try:
            return bcrypt.checkpw(self._prehash(secret), digest.encode("utf-8"))
        except (ValueError, TypeError):
            return False
