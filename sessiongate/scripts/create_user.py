"""
Create a user (e.g. the first admin). Run from project root:
  python -m sessiongate.scripts.create_user EMAIL PASSWORD NAME [role] [--status STATUS]
Example:
  python -m sessiongate.scripts.create_user admin@example.com your-secure-password "Site Admin" Admin
"""
import argparse
import sys

from sessiongate.core.config import get_settings
from sessiongate.core.database import create_db_engine, create_session_factory
from sessiongate.core.security import (
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    SecretHasher,
)
from sessiongate.models import User, UserRole, UserStatus
from sessiongate.schemas.auth import normalize_email
from sessiongate.services.user_store import UserStore


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a SessionGate user.")
    parser.add_argument("email", help="Email address (stored lower-case)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("name", help="Display name")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.CONTRIBUTOR.value,
        choices=[r.value for r in UserRole],
    )
    parser.add_argument(
        "--status",
        default=UserStatus.ACTIVE.value,
        choices=[s.value for s in UserStatus],
    )
    args = parser.parse_args()

    email = normalize_email(args.email)
    if "@" not in email or len(email) > EMAIL_MAX_LEN:
        print("Invalid email.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    hasher = SecretHasher(rounds=settings.BCRYPT_ROUNDS)
    engine = create_db_engine(settings.DATABASE_URL)
    db = create_session_factory(engine)()
    try:
        users = UserStore(db)
        if users.get_by_email(email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        users.add(
            User(
                name=args.name.strip(),
                email=email,
                password_hash=hasher.hash(args.password),
                role=args.role,
                status=args.status,
                login_count=0,
            )
        )
        db.commit()
        print(f"Created user '{email}' with role '{args.role}' and status '{args.status}'.")
        return 0
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    sys.exit(main())
