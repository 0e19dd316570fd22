"""
Authorization gate for team membership changes.

Two strategies exist while deployments migrate between authorization
models:

- LegacyTeamGuardian: the handler checks that the actor administers the team.
- UpstreamEnforcedGate: fine-grained access control already checked the
  actor's actions on the route, so the handler allows the change.
"""
from abc import ABC, abstractmethod

from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.core.errors import ForbiddenError
from teamhub.features.organizations.dependencies import get_org_role
from teamhub.features.organizations.models import OrgRole
from teamhub.features.teams.models import PermissionType
from teamhub.features.teams.settings import AccessControlMode
from teamhub.features.teams.store import get_team_member
from teamhub.features.users.models import User
from teamhub.utils import get_logger


log = get_logger(__name__)


class TeamAuthorizationGate(ABC):
    @abstractmethod
    async def can_mutate(self, db: AsyncSession, actor: User, organization_id: int, team_id: int) -> None:
        """Raise ForbiddenError unless the actor may change the team's members."""


class LegacyTeamGuardian(TeamAuthorizationGate):
    async def can_mutate(self, db: AsyncSession, actor: User, organization_id: int, team_id: int) -> None:
        await self.can_admin(db, organization_id, team_id, actor)

    async def can_admin(self, db: AsyncSession, organization_id: int, team_id: int, actor: User) -> None:
        """
        Org admins administer every team of their organization; anybody else
        must be an Admin member of the team itself.

        Raises:
            ForbiddenError: if the actor lacks admin rights on the team
        """
        if actor.is_admin:
            return

        if actor.current_organization_id != organization_id:
            raise ForbiddenError("User is not allowed to update a team in another organization")

        if await get_org_role(db, organization_id, actor.id) == OrgRole.ADMIN:
            return

        member = await get_team_member(db, organization_id, team_id, actor.id)
        if member is not None and member.permission == PermissionType.ADMIN:
            return

        log.debug("User %s is not allowed to administer team %s in org %s", actor.id, team_id, organization_id)
        raise ForbiddenError("User is not allowed to update team")


class UpstreamEnforcedGate(TeamAuthorizationGate):
    async def can_mutate(self, db: AsyncSession, actor: User, organization_id: int, team_id: int) -> None:
        return None


def gate_for_mode(mode: AccessControlMode) -> TeamAuthorizationGate:
    if mode == AccessControlMode.FINE_GRAINED:
        return UpstreamEnforcedGate()
    return LegacyTeamGuardian()
