import pytest
from sqlalchemy import select

from teamhub.core.errors import TeamMemberNotFoundError, TeamNotFoundError, UnknownPermissionError, UserNotFoundError
from teamhub.features.organizations.models import user_organizations
from teamhub.features.permissions.models import ManagedPermission
from teamhub.features.teams.models import PermissionType
from teamhub.features.teams.permissions import (
    TEAM_PERMISSIONS,
    map_team_permission,
    normalize_permission_label,
    team_permissions_service,
)
from teamhub.features.teams.store import get_team_member, is_team_member


ADMIN_ACTIONS = [
    "teams:read",
    "teams:delete",
    "teams:write",
    "teams.permissions:read",
    "teams.permissions:write",
]


@pytest.mark.parametrize("permission, label", [
    (PermissionType.MEMBER, "Member"),
    (PermissionType.ADMIN, "Admin"),
    (PermissionType.VIEW, "View"),
    (PermissionType.EDIT, "Edit"),
])
def test_normalize_permission_label(permission, label):
    assert normalize_permission_label(permission) == label


def test_member_label_is_empty_before_normalization():
    assert PermissionType.MEMBER.label == ""


def test_map_team_permission_is_deterministic():
    for permission in (PermissionType.MEMBER, PermissionType.ADMIN):
        assert map_team_permission(permission) == map_team_permission(permission)

    assert map_team_permission(PermissionType.MEMBER) == ["teams:read"]
    assert map_team_permission(PermissionType.ADMIN) == ADMIN_ACTIONS


def test_map_permission_returns_copy():
    actions = team_permissions_service.map_permission("Member")
    actions.append("teams:write")
    assert TEAM_PERMISSIONS["Member"] == ["teams:read"]


@pytest.mark.parametrize("label", ["View", "Edit", "", "admin"])
def test_map_unknown_permission(label):
    with pytest.raises(UnknownPermissionError):
        team_permissions_service.map_permission(label)


def test_map_actions():
    assert team_permissions_service.map_actions(["teams:read"]) == "Member"
    assert team_permissions_service.map_actions(list(reversed(ADMIN_ACTIONS))) == "Admin"
    assert team_permissions_service.map_actions([]) == ""


def test_scope():
    assert team_permissions_service.scope("3") == "teams:id:3"


async def test_set_user_permission_adds_member(db, seed):
    await team_permissions_service.set_user_permission(db, 1, 5, "3", ADMIN_ACTIONS, external=True)

    member = await get_team_member(db, 1, 3, 5)
    assert member.permission == PermissionType.ADMIN
    assert member.external is True
    assert await team_permissions_service.get_user_actions(db, 1, 5, "3") == sorted(ADMIN_ACTIONS)


async def test_set_user_permission_replaces_actions(db, seed):
    await team_permissions_service.set_user_permission(db, 1, 2, "3", ["teams:read"])

    member = await get_team_member(db, 1, 3, 2)
    assert member.permission == PermissionType.MEMBER
    assert await team_permissions_service.get_user_actions(db, 1, 2, "3") == ["teams:read"]


async def test_set_user_permission_keeps_external_flag(db, seed):
    await team_permissions_service.set_user_permission(db, 1, 6, "3", ADMIN_ACTIONS)

    member = await get_team_member(db, 1, 3, 6)
    assert member.external is True
    assert member.permission == PermissionType.ADMIN


async def test_empty_actions_remove_member(db, seed):
    await team_permissions_service.set_user_permission(db, 1, 6, "3", [])

    assert not await is_team_member(db, 1, 3, 6)
    result = await db.execute(select(ManagedPermission).where(ManagedPermission.user_id == 6))
    assert result.scalars().all() == []


async def test_remove_non_member(db, seed):
    with pytest.raises(TeamMemberNotFoundError):
        await team_permissions_service.set_user_permission(db, 1, 5, "3", [])


async def test_team_of_another_org_is_not_found(db, seed):
    with pytest.raises(TeamNotFoundError):
        await team_permissions_service.set_user_permission(db, 1, 5, "4", ["teams:read"])

    with pytest.raises(TeamNotFoundError):
        await team_permissions_service.set_user_permission(db, 1, 5, "4", [])


async def test_unmatched_actions_are_rejected(db, seed):
    with pytest.raises(UnknownPermissionError):
        await team_permissions_service.set_user_permission(db, 1, 5, "3", ["teams:write"])

    assert not await is_team_member(db, 1, 3, 5)


@pytest.mark.parametrize("user_id", [7, 999])
async def test_grant_requires_org_user(db, seed, user_id):
    with pytest.raises(UserNotFoundError):
        await team_permissions_service.set_user_permission(db, 1, user_id, "3", ["teams:read"])

    assert not await is_team_member(db, 1, 3, user_id)
    assert await team_permissions_service.get_user_actions(db, 1, user_id, "3") == []


async def test_revoke_after_user_left_org(db, seed):
    await db.execute(
        user_organizations.delete().where(user_organizations.c.user_id == 6)
    )

    await team_permissions_service.set_user_permission(db, 1, 6, "3", [])
    assert not await is_team_member(db, 1, 3, 6)
