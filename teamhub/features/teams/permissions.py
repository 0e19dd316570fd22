"""
Team permission mapping.

Team members hold either the "Member" or the "Admin" action set on the
team's scope (teams:id:<team id>).
"""
from typing import List

from teamhub.features.organizations.dependencies import validate_org_user
from teamhub.features.permissions.service import ResourcePermissionService
from teamhub.features.teams.models import PermissionType
from teamhub.features.teams.store import on_set_team_user, validate_team


TEAM_PERMISSIONS = {
    "Member": ["teams:read"],
    "Admin": [
        "teams:read",
        "teams:delete",
        "teams:write",
        "teams.permissions:read",
        "teams.permissions:write",
    ],
}

team_permissions_service = ResourcePermissionService(
    resource="teams",
    permissions=TEAM_PERMISSIONS,
    validator=validate_team,
    on_set_user=on_set_team_user,
    user_validator=validate_org_user,
)


def normalize_permission_label(permission: PermissionType) -> str:
    # Plain membership has an empty label, but the team permission service
    # knows it as "Member".
    label = PermissionType(permission).label
    if label == "":
        label = "Member"
    return label


def map_team_permission(permission: PermissionType, service: ResourcePermissionService = team_permissions_service) -> List[str]:
    """Actions granted by a team permission level."""
    return service.map_permission(normalize_permission_label(permission))
