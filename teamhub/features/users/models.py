"""
User model.
"""
from datetime import datetime
from sqlalchemy import String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teamhub.core.database.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    """
    A signed-in identity.

    `auth_module` names the identity source the account was synced from
    (ldap, oauth_github, auth.saml, ...) and is empty for local accounts.
    `is_admin` marks a server administrator, which outranks any org role.
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    login: Mapped[str] = mapped_column(String(190), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(190), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    auth_module: Mapped[str | None] = mapped_column(String(190), nullable=True)

    # Status flags
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    current_organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    organizations: Mapped[list["Organization"]] = relationship(  # type: ignore
        "Organization",
        secondary="user_organizations",
        back_populates="users",
        lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, login={self.login!r})>"
