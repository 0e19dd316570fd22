"""
Pydantic schemas for team membership requests and responses.
"""
from pydantic import BaseModel, ConfigDict, Field

from teamhub.features.teams.models import PermissionType


class AddTeamMemberCommand(BaseModel):
    """Body of POST /teams/{team_id}/members."""
    user_id: int = Field(..., alias="userId", gt=0)
    permission: PermissionType = Field(PermissionType.MEMBER, description="0 = Member, 4 = Admin")
    external: bool = Field(False, description="Membership synced from an external identity provider")

    model_config = ConfigDict(populate_by_name=True)


class UpdateTeamMemberCommand(BaseModel):
    """Body of PUT /teams/{team_id}/members/{user_id}."""
    permission: PermissionType = PermissionType.MEMBER


class TeamMemberResponse(BaseModel):
    org_id: int = Field(..., alias="orgId")
    team_id: int = Field(..., alias="teamId")
    user_id: int = Field(..., alias="userId")
    email: str
    name: str
    login: str
    auth_module: str = ""
    avatar_url: str = Field("", alias="avatarUrl")
    labels: list[str] = Field(default_factory=list)
    permission: PermissionType
    external: bool = Field(False, exclude=True)

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    message: str
