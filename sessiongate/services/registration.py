"""Self-service account creation (signup)."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sessiongate.core.exceptions import EmailAlreadyRegistered
from sessiongate.core.security import SecretHasher
from sessiongate.models import User, UserRole, UserStatus
from sessiongate.schemas.auth import SignupRequest
from sessiongate.services.user_store import UserStore

logger = logging.getLogger(__name__)


def register_user(db: Session, hasher: SecretHasher, body: SignupRequest) -> User:
    """
    Create a Contributor account in Pending status.

    Pending users cannot log in until activated by user management.
    Raises EmailAlreadyRegistered if the email is taken.
    """
    users = UserStore(db)
    if users.get_by_email(body.email) is not None:
        raise EmailAlreadyRegistered()

    user = User(
        name=body.name,
        email=body.email,
        password_hash=hasher.hash(body.password),
        role=UserRole.CONTRIBUTOR.value,
        status=UserStatus.PENDING.value,
        login_count=0,
    )
    try:
        users.add(user)
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent signup for the same email.
        db.rollback()
        raise EmailAlreadyRegistered() from e
    db.refresh(user)
    logger.info("Registered user_id=%s", user.id)
    return user
