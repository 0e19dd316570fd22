"""
Organization models.

Organizations scope every team. Users belong to several organizations and
carry one org role in each; the signed-in user's current organization is the
request's organization context.
"""
from datetime import datetime
from sqlalchemy import String, ForeignKey, Table, Column, Boolean, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
import enum

from teamhub.core.database.base import Base, TimestampMixin


class OrgRole(str, enum.Enum):
    """Role of a user inside one organization."""
    VIEWER = "Viewer"
    EDITOR = "Editor"
    ADMIN = "Admin"


# Association table between users and organizations
user_organizations = Table(
    "user_organizations",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("organization_id", Integer, ForeignKey("organizations.id", ondelete="CASCADE"), primary_key=True),
    Column("joined_at", DateTime(timezone=True), nullable=False, default=datetime.now),
    Column("role", String(20), nullable=False, default=OrgRole.VIEWER.value),
)


class Organization(Base, TimestampMixin):
    """An organization owning teams and members."""
    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(190), unique=True, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    users: Mapped[list["User"]] = relationship(  # type: ignore
        "User",
        secondary=user_organizations,
        back_populates="organizations",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name!r})>"
