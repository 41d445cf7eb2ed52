"""Shared builders for tests: settings, in-memory database, users."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sessiongate.core.config import Settings
from sessiongate.core.security import SecretHasher
from sessiongate.models import Base, RefreshCredential, User, UserRole, UserStatus

TEST_ACCESS_SECRET = "test-access-secret-0123456789abcdef0123456789"
TEST_REFRESH_SECRET = "test-refresh-secret-fedcba9876543210fedcba98"
TEST_PASSWORD = "correct-horse-battery"


def make_settings(**overrides: object) -> Settings:
    """Settings for tests: SQLite, fast bcrypt, distinct secrets."""
    values: dict[str, object] = {
        "DATABASE_URL": "sqlite://",
        "ACCESS_TOKEN_SECRET": TEST_ACCESS_SECRET,
        "REFRESH_TOKEN_SECRET": TEST_REFRESH_SECRET,
        "BCRYPT_ROUNDS": 4,
        "LOG_LEVEL": "WARNING",
        "COOKIE_SECURE": False,
    }
    values.update(overrides)
    return Settings(**values)


def make_session_factory() -> sessionmaker:
    """Single-connection in-memory SQLite database with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_user(
    session_factory: sessionmaker,
    hasher: SecretHasher,
    email: str = "user@example.com",
    password: str = TEST_PASSWORD,
    name: str = "Test User",
    role: str = UserRole.EDITOR.value,
    status: str = UserStatus.ACTIVE.value,
) -> int:
    """Insert a user and return its id."""
    db = session_factory()
    try:
        user = User(
            name=name,
            email=email,
            password_hash=hasher.hash(password),
            role=role,
            status=status,
            login_count=0,
        )
        db.add(user)
        db.commit()
        return user.id
    finally:
        db.close()


def count_refresh_credentials(session_factory: sessionmaker, user_id: int) -> int:
    db = session_factory()
    try:
        return db.query(RefreshCredential).filter(RefreshCredential.user_id == user_id).count()
    finally:
        db.close()


def get_refresh_credential(session_factory: sessionmaker, user_id: int) -> RefreshCredential | None:
    db = session_factory()
    try:
        return db.query(RefreshCredential).filter(RefreshCredential.user_id == user_id).first()
    finally:
        db.close()


def get_user(session_factory: sessionmaker, user_id: int) -> User | None:
    db = session_factory()
    try:
        return db.query(User).filter(User.id == user_id).first()
    finally:
        db.close()
