"""
SQLAlchemy declarative base and shared column mixins.

Every table in the team membership service is declared on Base so that
init_db() can create the whole schema in one pass.
"""
from datetime import datetime
from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """
    Declarative base for all models.

    Usage:
        from teamhub.core.database.base import Base

        class Team(Base):
            __tablename__ = "teams"

            id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    """
    pass


class TimestampMixin:
    """Adds created_at / updated_at columns maintained by the database."""
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
