"""
Domain errors raised by the team membership services.

Routes translate these into HTTPException responses; services never build
HTTP responses themselves.
"""
from typing import Optional


class TeamHubError(Exception):
    """Base class for team membership errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class ForbiddenError(TeamHubError):
    """The actor may not administer the team."""
    pass


class AlreadyExistsError(TeamHubError):
    """The user is already a member of the team."""
    pass


class TeamNotFoundError(TeamHubError):
    """No such team in the organization."""
    pass


class TeamMemberNotFoundError(TeamHubError):
    """The user is not a member of the team."""
    pass


class UnknownPermissionError(TeamHubError):
    """A permission label the resource-permission store does not define."""
    pass


class StoreFailureError(TeamHubError):
    """The resource-permission store failed to read or write."""
    pass


class UserNotFoundError(TeamHubError):
    """The user does not exist in the organization."""
    pass
