"""
Action/scope checks used when fine-grained access control is enabled.
"""
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.features.users.models import User
from teamhub.features.organizations.dependencies import get_org_role
from teamhub.features.organizations.models import OrgRole
from teamhub.features.permissions.models import ManagedPermission
from teamhub.utils import get_logger


log = get_logger(__name__)


async def has_action(
    db: AsyncSession,
    user: User,
    organization_id: int,
    action: str,
    scope: str,
) -> bool:
    """
    Check whether a user may perform an action on a scope.

    Server admins and org admins hold every action in their organization;
    everybody else needs a managed permission row for the exact
    action and scope.
    """
    if user.is_admin:
        log.debug(f"User {user.id} is server admin - granted {action} on {scope}")
        return True

    if await get_org_role(db, organization_id, user.id) == OrgRole.ADMIN:
        log.debug(f"User {user.id} is org admin - granted {action} on {scope}")
        return True

    result = await db.execute(
        select(ManagedPermission.id).where(
            and_(
                ManagedPermission.organization_id == organization_id,
                ManagedPermission.user_id == user.id,
                ManagedPermission.action == action,
                ManagedPermission.scope == scope,
            )
        ).limit(1)
    )
    if result.first() is not None:
        return True

    log.debug(f"User {user.id} denied {action} on {scope} in org {organization_id}")
    return False
