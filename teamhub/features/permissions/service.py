"""
Resource-permission store.

A ResourcePermissionService manages the actions users hold on one resource
type. Permission labels ("Member", "Admin", ...) map to fixed action sets;
writing a user's actions replaces whatever they held on that resource.
Resource types plug in a validator (does the resource exist?) and an
on_set_user hook that mirrors the grant into the resource's own tables. A
user_validator checks that a user being granted actions may hold them.
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence
from sqlalchemy import select, delete, and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.core.errors import StoreFailureError, TeamHubError, UnknownPermissionError
from teamhub.features.permissions.models import ManagedPermission
from teamhub.utils import get_logger


log = get_logger(__name__)

ResourceValidator = Callable[[AsyncSession, int, str], Awaitable[None]]
UserValidator = Callable[[AsyncSession, int, int], Awaitable[None]]
SetUserHook = Callable[..., Awaitable[None]]


class ResourcePermissionService:
    def __init__(
        self,
        resource: str,
        permissions: Dict[str, List[str]],
        validator: Optional[ResourceValidator] = None,
        on_set_user: Optional[SetUserHook] = None,
        user_validator: Optional[UserValidator] = None,
    ) -> None:
        self.resource = resource
        self.permissions = permissions
        self.validator = validator
        self.on_set_user = on_set_user
        self.user_validator = user_validator

    def scope(self, resource_id: str) -> str:
        return f"{self.resource}:id:{resource_id}"

    def map_permission(self, permission: str) -> List[str]:
        """
        Map a permission label to the actions it grants.

        Raises:
            UnknownPermissionError: if the label is not defined for this resource
        """
        try:
            return list(self.permissions[permission])
        except KeyError:
            raise UnknownPermissionError(f"Unknown {self.resource} permission: {permission!r}")

    def map_actions(self, actions: Sequence[str]) -> str:
        """Reverse of map_permission; "" when the actions match no label."""
        wanted = set(actions)
        for label, granted in self.permissions.items():
            if wanted == set(granted):
                return label
        return ""

    async def get_user_actions(
        self,
        db: AsyncSession,
        organization_id: int,
        user_id: int,
        resource_id: str,
    ) -> List[str]:
        result = await db.execute(
            select(ManagedPermission.action).where(
                and_(
                    ManagedPermission.organization_id == organization_id,
                    ManagedPermission.user_id == user_id,
                    ManagedPermission.scope == self.scope(resource_id),
                )
            )
        )
        return sorted(result.scalars().all())

    async def set_user_permission(
        self,
        db: AsyncSession,
        organization_id: int,
        user_id: int,
        resource_id: str,
        actions: Sequence[str],
        **hook_kwargs: Any,
    ) -> List[ManagedPermission]:
        """
        Replace the actions a user holds on a resource.

        An empty action list revokes everything. Extra keyword arguments are
        passed through to the on_set_user hook.

        Raises:
            UnknownPermissionError: if non-empty actions match no label
            TeamHubError subclasses raised by the validator or hook
            UserNotFoundError: from the user validator, when granting actions
            StoreFailureError: if the database write fails
        """
        scope = self.scope(resource_id)
        permission = self.map_actions(actions)
        if actions and permission == "":
            raise UnknownPermissionError(f"Actions {sorted(actions)} match no {self.resource} permission")

        try:
            if self.validator is not None:
                await self.validator(db, organization_id, resource_id)

            # Revoking stays possible for users who have since left the organization
            if actions and self.user_validator is not None:
                await self.user_validator(db, organization_id, user_id)

            if self.on_set_user is not None:
                await self.on_set_user(db, organization_id, user_id, resource_id, permission, **hook_kwargs)

            await db.execute(
                delete(ManagedPermission).where(
                    and_(
                        ManagedPermission.organization_id == organization_id,
                        ManagedPermission.user_id == user_id,
                        ManagedPermission.scope == scope,
                    )
                )
            )
            rows = [
                ManagedPermission(organization_id=organization_id, user_id=user_id, action=action, scope=scope)
                for action in sorted(set(actions))
            ]
            db.add_all(rows)
            await db.flush()
        except TeamHubError:
            raise
        except SQLAlchemyError as e:
            log.exception("Failed to set %s permission for user %s on %s", self.resource, user_id, scope)
            raise StoreFailureError(f"Failed to set permission on {scope}", cause=e)

        log.debug("User %s now holds %s on %s in org %s", user_id, sorted(set(actions)), scope, organization_id)
        return rows
