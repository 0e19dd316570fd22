"""
Team membership routes.
"""
from typing import Annotated, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.core.database.engine import get_db
from teamhub.core.errors import (
    AlreadyExistsError,
    ForbiddenError,
    StoreFailureError,
    TeamMemberNotFoundError,
    TeamNotFoundError,
    UnknownPermissionError,
    UserNotFoundError,
)
from teamhub.features.organizations.dependencies import get_current_org_id
from teamhub.features.teams import service
from teamhub.features.teams.dependencies import get_authorization_gate, require_team_action
from teamhub.features.teams.guardian import TeamAuthorizationGate
from teamhub.features.teams.schemas import (
    AddTeamMemberCommand,
    MessageResponse,
    TeamMemberResponse,
    UpdateTeamMemberCommand,
)
from teamhub.features.teams.settings import TeamSettings, get_team_settings
from teamhub.features.users.models import User
from teamhub.utils import get_logger


log = get_logger(__name__)
router = APIRouter(tags=["teams"])


@router.get("/{team_id}/members", response_model=List[TeamMemberResponse])
async def get_team_members(
    team_id: int,
    user: Annotated[User, Depends(require_team_action("teams.permissions:read"))],
    org_id: Annotated[int, Depends(get_current_org_id)],
    settings: Annotated[TeamSettings, Depends(get_team_settings)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """List the members of a team."""
    try:
        return await service.list_team_members(db, settings, user, org_id, team_id)
    except SQLAlchemyError:
        log.exception("Failed to get members of team %s", team_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get Team Members"
        )


@router.post("/{team_id}/members", response_model=MessageResponse)
async def add_team_member(
    team_id: int,
    cmd: AddTeamMemberCommand,
    user: Annotated[User, Depends(require_team_action("teams.permissions:write"))],
    org_id: Annotated[int, Depends(get_current_org_id)],
    gate: Annotated[TeamAuthorizationGate, Depends(get_authorization_gate)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Add a user to a team."""
    try:
        await service.add_team_member(
            db, gate, user, org_id, team_id, cmd.user_id, cmd.permission, external=cmd.external
        )
    except ForbiddenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to add team member")
    except AlreadyExistsError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User is already added to this team")
    except UnknownPermissionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except TeamNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not found")
    except (StoreFailureError, SQLAlchemyError):
        log.exception("Failed to add user %s to team %s", cmd.user_id, team_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add Member to Team"
        )

    return {"message": "Member added to Team"}


@router.put("/{team_id}/members/{user_id}", response_model=MessageResponse)
async def update_team_member(
    team_id: int,
    user_id: int,
    cmd: UpdateTeamMemberCommand,
    user: Annotated[User, Depends(require_team_action("teams.permissions:write"))],
    org_id: Annotated[int, Depends(get_current_org_id)],
    gate: Annotated[TeamAuthorizationGate, Depends(get_authorization_gate)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Change a team member's permission."""
    try:
        await service.update_team_member(db, gate, user, org_id, team_id, user_id, cmd.permission)
    except ForbiddenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to update team member")
    except TeamMemberNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team member not found.")
    except UnknownPermissionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except UserNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    except TeamNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not found")
    except (StoreFailureError, SQLAlchemyError):
        log.exception("Failed to update user %s on team %s", user_id, team_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update team member."
        )

    return {"message": "Team member updated"}


@router.delete("/{team_id}/members/{user_id}", response_model=MessageResponse)
async def remove_team_member(
    team_id: int,
    user_id: int,
    user: Annotated[User, Depends(require_team_action("teams.permissions:write"))],
    org_id: Annotated[int, Depends(get_current_org_id)],
    gate: Annotated[TeamAuthorizationGate, Depends(get_authorization_gate)],
    db: Annotated[AsyncSession, Depends(get_db)]
):
    """Remove a user from a team."""
    try:
        await service.remove_team_member(db, gate, user, org_id, team_id, user_id)
    except ForbiddenError:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed to remove team member")
    except TeamNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team not found")
    except TeamMemberNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Team member not found")
    except (StoreFailureError, SQLAlchemyError):
        log.exception("Failed to remove user %s from team %s", user_id, team_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to remove Member from Team"
        )

    return {"message": "Team Member removed"}
