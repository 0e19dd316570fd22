import pytest

from teamhub.core.errors import ForbiddenError
from teamhub.features.teams.guardian import (
    LegacyTeamGuardian,
    TeamAuthorizationGate,
    UpstreamEnforcedGate,
    gate_for_mode,
)
from teamhub.features.teams.settings import AccessControlMode


def test_gate_for_mode():
    assert isinstance(gate_for_mode(AccessControlMode.LEGACY), LegacyTeamGuardian)
    assert isinstance(gate_for_mode(AccessControlMode.FINE_GRAINED), UpstreamEnforcedGate)


def test_gate_strategies_must_implement_can_mutate():
    with pytest.raises(TypeError):
        TeamAuthorizationGate()

    class Incomplete(TeamAuthorizationGate):
        pass

    with pytest.raises(TypeError):
        Incomplete()


class TestLegacyTeamGuardian:
    async def test_org_admin_can_admin_any_team(self, db, seed):
        await LegacyTeamGuardian().can_admin(db, 1, 3, seed.org_admin)

    async def test_team_admin_can_admin_team(self, db, seed):
        await LegacyTeamGuardian().can_mutate(db, seed.team_admin, 1, 3)

    async def test_server_admin_can_admin_any_org(self, db, seed):
        await LegacyTeamGuardian().can_mutate(db, seed.server_admin, 1, 3)

    async def test_plain_member_is_denied(self, db, seed):
        with pytest.raises(ForbiddenError):
            await LegacyTeamGuardian().can_mutate(db, seed.member, 1, 3)

    async def test_viewer_is_denied(self, db, seed):
        with pytest.raises(ForbiddenError):
            await LegacyTeamGuardian().can_mutate(db, seed.viewer, 1, 3)

    async def test_other_org_is_denied(self, db, seed):
        # Org admin of org 1 asking about a team in org 2
        with pytest.raises(ForbiddenError):
            await LegacyTeamGuardian().can_mutate(db, seed.org_admin, 2, 4)


async def test_upstream_gate_allows_everybody(db, seed):
    await UpstreamEnforcedGate().can_mutate(db, seed.viewer, 1, 3)
