"""
Team and team membership models.
"""
import enum
from sqlalchemy import String, ForeignKey, Boolean, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from teamhub.core.database.base import Base, TimestampMixin


class PermissionType(enum.IntEnum):
    """Permission level of a team member."""
    MEMBER = 0
    VIEW = 1
    EDIT = 2
    ADMIN = 4

    @property
    def label(self) -> str:
        """Canonical label; plain members have an empty label."""
        return _PERMISSION_LABELS[self]


_PERMISSION_LABELS = {
    PermissionType.MEMBER: "",
    PermissionType.VIEW: "View",
    PermissionType.EDIT: "Edit",
    PermissionType.ADMIN: "Admin",
}


class Team(Base, TimestampMixin):
    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("organization_id", "name", name="uq_team_org_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name: Mapped[str] = mapped_column(String(190), nullable=False)
    email: Mapped[str | None] = mapped_column(String(190), nullable=True)

    def __repr__(self) -> str:
        return f"<Team(id={self.id}, org_id={self.organization_id}, name={self.name!r})>"


class TeamMember(Base, TimestampMixin):
    """
    Membership of a user in a team.

    `external` marks memberships synced from an external identity provider;
    only adding a member sets it, later permission updates keep it.
    """
    __tablename__ = "team_members"
    __table_args__ = (
        UniqueConstraint("organization_id", "team_id", "user_id", name="uq_team_member"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    team_id: Mapped[int] = mapped_column(
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    external: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    permission: Mapped[int] = mapped_column(Integer, default=int(PermissionType.MEMBER), nullable=False)

    def __repr__(self) -> str:
        return f"<TeamMember(team_id={self.team_id}, user_id={self.user_id}, permission={self.permission})>"
