"""Error taxonomy for authentication and session handling.

Every error carries the HTTP status, a stable machine-readable code and a
message that is safe to show to clients.
"""


class AuthError(Exception):
    """Base class; rendered by the handler registered in create_app."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Missing or malformed input."""

    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class InvalidCredentials(AuthError):
    """Wrong email or password. The message never says which."""

    status_code = 401
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid email or password"


class InvalidAccessToken(AuthError):
    """Access token failed signature or format checks (not merely expired)."""

    status_code = 401
    code = "INVALID_ACCESS_TOKEN"
    default_message = "Invalid access token"


class Unauthorized(AuthError):
    status_code = 401
    code = "UNAUTHORIZED"
    default_message = "Unauthorized: User not authenticated"


class AccountInactive(AuthError):
    """Suspended or pending account."""

    status_code = 403
    code = "ACCOUNT_INACTIVE"
    default_message = "Account is not active"


REFRESH_FAILED_MESSAGE = "Refresh token revoked or expired"


class RefreshRevoked(AuthError):
    """Refresh token unknown, tampered, deleted server-side or owned by a blocked user."""

    status_code = 403
    code = "REFRESH_REVOKED"
    default_message = REFRESH_FAILED_MESSAGE


class RefreshExpired(AuthError):
    status_code = 403
    code = "REFRESH_EXPIRED"
    default_message = REFRESH_FAILED_MESSAGE


class EmailAlreadyRegistered(AuthError):
    status_code = 409
    code = "EMAIL_TAKEN"
    default_message = "User with this email already exists"


class InternalError(AuthError):
    """Storage or codec failure; details stay in the server log."""
