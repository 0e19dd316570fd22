"""
Team membership operations.

Mutations run gate -> membership precondition -> permission mapping -> one
write to the team resource-permission service. The HTTP layer only binds
requests and translates the domain errors raised here.
"""
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.core.errors import AlreadyExistsError, TeamMemberNotFoundError
from teamhub.features.permissions.service import ResourcePermissionService
from teamhub.features.teams.guardian import TeamAuthorizationGate
from teamhub.features.teams.models import PermissionType
from teamhub.features.teams.permissions import map_team_permission, team_permissions_service
from teamhub.features.teams.presentation import get_auth_provider_label, get_gravatar_url, is_hidden_user
from teamhub.features.teams.schemas import TeamMemberResponse
from teamhub.features.teams.settings import TEAM_GROUP_SYNC_FEATURE, TeamSettings
from teamhub.features.teams.store import get_team_members, is_team_member
from teamhub.features.users.models import User
from teamhub.utils import get_logger


log = get_logger(__name__)


async def list_team_members(
    db: AsyncSession,
    settings: TeamSettings,
    caller: User,
    organization_id: int,
    team_id: int,
) -> List[TeamMemberResponse]:
    rows = await get_team_members(db, organization_id, team_id)

    members = []
    for member, user in rows:
        # TODO: filter in the query by the caller's users:read scope once fine-grained access control covers users
        if settings.legacy_access_control and is_hidden_user(user.login, caller, settings):
            continue

        labels = []
        if settings.feature_enabled(TEAM_GROUP_SYNC_FEATURE) and member.external:
            labels.append(get_auth_provider_label(user.auth_module))

        members.append(TeamMemberResponse(
            org_id=member.organization_id,
            team_id=member.team_id,
            user_id=user.id,
            email=user.email,
            name=user.name,
            login=user.login,
            auth_module=user.auth_module or "",
            avatar_url=get_gravatar_url(user.email, settings),
            labels=labels,
            permission=PermissionType(member.permission),
            external=member.external,
        ))

    return members


async def add_team_member(
    db: AsyncSession,
    gate: TeamAuthorizationGate,
    actor: User,
    organization_id: int,
    team_id: int,
    user_id: int,
    permission: PermissionType,
    external: bool = False,
    service: ResourcePermissionService = team_permissions_service,
) -> None:
    """
    Raises:
        ForbiddenError: the actor may not administer the team
        AlreadyExistsError: the user is already on the team
        UnknownPermissionError: the permission has no team action set
        UserNotFoundError: the user is not in the organization
        TeamNotFoundError, StoreFailureError: from the permission store
    """
    await gate.can_mutate(db, actor, organization_id, team_id)

    if await is_team_member(db, organization_id, team_id, user_id):
        raise AlreadyExistsError("User is already added to this team")

    actions = map_team_permission(permission, service)
    await service.set_user_permission(db, organization_id, user_id, str(team_id), actions, external=external)
    log.info("User %s added user %s to team %s in org %s", actor.id, user_id, team_id, organization_id)


async def update_team_member(
    db: AsyncSession,
    gate: TeamAuthorizationGate,
    actor: User,
    organization_id: int,
    team_id: int,
    user_id: int,
    permission: PermissionType,
    service: ResourcePermissionService = team_permissions_service,
) -> None:
    """
    Raises:
        ForbiddenError: the actor may not administer the team
        TeamMemberNotFoundError: the user is not on the team
        UnknownPermissionError: the permission has no team action set
    """
    await gate.can_mutate(db, actor, organization_id, team_id)

    if not await is_team_member(db, organization_id, team_id, user_id):
        raise TeamMemberNotFoundError("Team member not found")

    actions = map_team_permission(permission, service)
    await service.set_user_permission(db, organization_id, user_id, str(team_id), actions)
    log.info(
        "User %s set permission %s for user %s on team %s in org %s",
        actor.id, permission.name, user_id, team_id, organization_id
    )


async def remove_team_member(
    db: AsyncSession,
    gate: TeamAuthorizationGate,
    actor: User,
    organization_id: int,
    team_id: int,
    user_id: int,
    service: ResourcePermissionService = team_permissions_service,
) -> None:
    """
    Revoke every team action of the user, which removes the membership.

    Raises:
        ForbiddenError: the actor may not administer the team
        TeamNotFoundError / TeamMemberNotFoundError: from the permission store
    """
    await gate.can_mutate(db, actor, organization_id, team_id)

    await service.set_user_permission(db, organization_id, user_id, str(team_id), [])
    log.info("User %s removed user %s from team %s in org %s", actor.id, user_id, team_id, organization_id)
