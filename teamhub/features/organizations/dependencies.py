"""
Organization context helpers.
"""
from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from teamhub.core.errors import UserNotFoundError
from teamhub.features.users.models import User
from teamhub.features.users.dependencies import get_current_user
from teamhub.features.organizations.models import OrgRole, user_organizations


async def get_org_role(db: AsyncSession, organization_id: int, user_id: int) -> Optional[OrgRole]:
    """Return the user's role in the organization, or None if not a member."""
    result = await db.execute(
        select(user_organizations.c.role).where(
            and_(
                user_organizations.c.organization_id == organization_id,
                user_organizations.c.user_id == user_id
            )
        )
    )
    role = result.scalar_one_or_none()
    return OrgRole(role) if role is not None else None


async def get_current_org_id(
    user: Annotated[User, Depends(get_current_user)]
) -> int:
    """
    Organization id of the request context.

    Raises:
        HTTPException: 400 if the user has no current organization
    """
    if user.current_organization_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No current organization set. Please switch to an organization first."
        )
    return user.current_organization_id


async def validate_org_user(db: AsyncSession, organization_id: int, user_id: int) -> None:
    """
    Check that the user belongs to the organization.

    Raises:
        UserNotFoundError: if the user is unknown or not in the organization
    """
    if await get_org_role(db, organization_id, user_id) is None:
        raise UserNotFoundError(f"User {user_id} not found in organization {organization_id}")
