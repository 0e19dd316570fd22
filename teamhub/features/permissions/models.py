"""
Managed permission rows owned by the resource-permission store.

A row grants one action on one scope to one user inside an organization,
e.g. action="teams:read", scope="teams:id:3".
"""
from sqlalchemy import String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from teamhub.core.database.base import Base, TimestampMixin


class ManagedPermission(Base, TimestampMixin):
    __tablename__ = "managed_permissions"
    __table_args__ = (
        UniqueConstraint("organization_id", "user_id", "action", "scope", name="uq_managed_permission"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    action: Mapped[str] = mapped_column(String(190), nullable=False, index=True)
    scope: Mapped[str] = mapped_column(String(190), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<ManagedPermission(user_id={self.user_id}, action={self.action}, scope={self.scope})>"
