"""
Team feature dependencies.
"""
from typing import Annotated
from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.core.database.engine import get_db
from teamhub.features.organizations.dependencies import get_current_org_id
from teamhub.features.permissions.dependencies import has_action
from teamhub.features.teams.guardian import TeamAuthorizationGate, gate_for_mode
from teamhub.features.teams.permissions import team_permissions_service
from teamhub.features.teams.settings import TeamSettings, get_team_settings
from teamhub.features.users.dependencies import get_current_user
from teamhub.features.users.models import User


def get_authorization_gate(
    settings: Annotated[TeamSettings, Depends(get_team_settings)]
) -> TeamAuthorizationGate:
    return gate_for_mode(settings.access_control_mode)


def require_team_action(action: str):
    """
    Route dependency enforcing an action on the team scope when fine-grained
    access control is enabled. In legacy mode it only resolves the user.

    Usage:
        @router.post("/{team_id}/members")
        async def add_member(
            team_id: int,
            user: User = Depends(require_team_action("teams.permissions:write"))
        ):
            ...

    Raises:
        HTTPException: 403 if the user lacks the action on teams:id:<team_id>
    """
    async def team_action_dependency(
        team_id: int,
        db: Annotated[AsyncSession, Depends(get_db)],
        current_user: Annotated[User, Depends(get_current_user)],
        org_id: Annotated[int, Depends(get_current_org_id)],
        settings: Annotated[TeamSettings, Depends(get_team_settings)],
    ) -> User:
        if settings.legacy_access_control:
            return current_user

        scope = team_permissions_service.scope(str(team_id))
        if not await has_action(db, current_user, org_id, action, scope):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Permission denied: {action} on {scope}"
            )
        return current_user

    return team_action_dependency
