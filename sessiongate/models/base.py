"""SQLAlchemy declarative Base shared by the users and refresh_credentials tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
