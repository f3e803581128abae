"""
SQLAlchemy Base Models

Provides the declarative base and reusable mixins for all ORM models.
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Declarative base class for all SQLAlchemy ORM models."""

    pass


class CreatedAtMixin:
    """
    Mixin that adds a store-assigned created_at timestamp.

    Behavior:
        - created_at: Set by database on INSERT (server_default), never updated

    Note:
        Uses timezone-aware timestamps for proper UTC handling.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),  # Database-side default, not Python-side
        nullable=False,
    )
