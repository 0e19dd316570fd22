"""
Team membership persistence.

Queries used by the membership handlers, plus the hooks the team
resource-permission service calls to mirror grants into team_members.
"""
from typing import List, Optional, Tuple
from sqlalchemy import select, delete, and_
from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.core.errors import TeamNotFoundError, TeamMemberNotFoundError, UnknownPermissionError
from teamhub.features.teams.models import PermissionType, Team, TeamMember
from teamhub.features.users.models import User


async def get_team(db: AsyncSession, organization_id: int, team_id: int) -> Optional[Team]:
    result = await db.execute(
        select(Team).where(and_(Team.organization_id == organization_id, Team.id == team_id))
    )
    return result.scalar_one_or_none()


async def get_team_member(
    db: AsyncSession, organization_id: int, team_id: int, user_id: int
) -> Optional[TeamMember]:
    result = await db.execute(
        select(TeamMember).where(
            and_(
                TeamMember.organization_id == organization_id,
                TeamMember.team_id == team_id,
                TeamMember.user_id == user_id,
            )
        )
    )
    return result.scalar_one_or_none()


async def is_team_member(db: AsyncSession, organization_id: int, team_id: int, user_id: int) -> bool:
    return await get_team_member(db, organization_id, team_id, user_id) is not None


async def get_team_members(
    db: AsyncSession, organization_id: int, team_id: int
) -> List[Tuple[TeamMember, User]]:
    """Members of a team with their user records, ordered by login."""
    result = await db.execute(
        select(TeamMember, User)
        .join(User, User.id == TeamMember.user_id)
        .where(
            and_(
                TeamMember.organization_id == organization_id,
                TeamMember.team_id == team_id,
            )
        )
        .order_by(User.login)
    )
    return [(member, user) for member, user in result.all()]


async def validate_team(db: AsyncSession, organization_id: int, resource_id: str) -> None:
    """Resource validator: the team must exist in the organization."""
    if await get_team(db, organization_id, int(resource_id)) is None:
        raise TeamNotFoundError("Team not found")


async def add_or_update_team_member(
    db: AsyncSession,
    organization_id: int,
    team_id: int,
    user_id: int,
    permission: PermissionType,
    external: Optional[bool] = None,
) -> TeamMember:
    """
    Insert a membership or change its permission.

    `external` only applies on insert; an existing membership keeps its flag.
    """
    member = await get_team_member(db, organization_id, team_id, user_id)
    if member is None:
        member = TeamMember(
            organization_id=organization_id,
            team_id=team_id,
            user_id=user_id,
            external=bool(external),
            permission=int(permission),
        )
        db.add(member)
    else:
        member.permission = int(permission)
    await db.flush()
    return member


async def remove_team_member(db: AsyncSession, organization_id: int, team_id: int, user_id: int) -> None:
    """
    Raises:
        TeamNotFoundError: if the team is not in the organization
        TeamMemberNotFoundError: if the user is not on the team
    """
    if await get_team(db, organization_id, team_id) is None:
        raise TeamNotFoundError("Team not found")

    result = await db.execute(
        delete(TeamMember).where(
            and_(
                TeamMember.organization_id == organization_id,
                TeamMember.team_id == team_id,
                TeamMember.user_id == user_id,
            )
        )
    )
    if result.rowcount == 0:
        raise TeamMemberNotFoundError("Team member not found")


async def on_set_team_user(
    db: AsyncSession,
    organization_id: int,
    user_id: int,
    resource_id: str,
    permission: str,
    external: Optional[bool] = None,
) -> None:
    """Mirror a team permission grant into team_members."""
    team_id = int(resource_id)
    if permission == "Member":
        await add_or_update_team_member(db, organization_id, team_id, user_id, PermissionType.MEMBER, external)
    elif permission == "Admin":
        await add_or_update_team_member(db, organization_id, team_id, user_id, PermissionType.ADMIN, external)
    elif permission == "":
        await remove_team_member(db, organization_id, team_id, user_id)
    else:
        raise UnknownPermissionError(f"Invalid team permission type {permission!r}")
