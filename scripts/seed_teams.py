"""
Seed script for local development.

Creates one organization with an admin, an editor and a viewer, plus a
"platform" team whose admin is the editor. Existing rows are left alone, so
the script can be re-run.

Usage:
    python -m scripts.seed_teams
"""
import asyncio
from sqlalchemy import select

from teamhub.core.database.engine import AsyncSessionLocal, init_db
from teamhub.features.organizations.models import Organization, OrgRole, user_organizations
from teamhub.features.teams.models import PermissionType, Team
from teamhub.features.teams.permissions import map_team_permission, team_permissions_service
from teamhub.features.teams.store import is_team_member
from teamhub.features.users.models import User
from teamhub.utils import get_logger


log = get_logger(__name__)


DEFAULT_ORGANIZATION = "Main Org."

DEFAULT_USERS = [
    # login, email, org role
    ("admin", "admin@localhost", OrgRole.ADMIN),
    ("editor", "editor@localhost", OrgRole.EDITOR),
    ("viewer", "viewer@localhost", OrgRole.VIEWER),
]

DEFAULT_TEAM = "platform"


async def get_or_create_organization(db) -> Organization:
    result = await db.execute(select(Organization).where(Organization.name == DEFAULT_ORGANIZATION))
    org = result.scalar_one_or_none()
    if org is None:
        org = Organization(name=DEFAULT_ORGANIZATION)
        db.add(org)
        await db.flush()
        log.info("Created organization %s", org.name)
    return org


async def get_or_create_user(db, org: Organization, login: str, email: str, role: OrgRole) -> User:
    result = await db.execute(select(User).where(User.login == login))
    user = result.scalar_one_or_none()
    if user is None:
        user = User(login=login, email=email, name=login.title(), current_organization_id=org.id)
        db.add(user)
        await db.flush()
        await db.execute(
            user_organizations.insert().values(user_id=user.id, organization_id=org.id, role=role.value)
        )
        log.info("Created user %s as %s", login, role.value)
    return user


async def seed():
    await init_db()

    async with AsyncSessionLocal() as db:
        org = await get_or_create_organization(db)
        users = {
            login: await get_or_create_user(db, org, login, email, role)
            for login, email, role in DEFAULT_USERS
        }

        result = await db.execute(
            select(Team).where(Team.organization_id == org.id, Team.name == DEFAULT_TEAM)
        )
        team = result.scalar_one_or_none()
        if team is None:
            team = Team(organization_id=org.id, name=DEFAULT_TEAM)
            db.add(team)
            await db.flush()
            log.info("Created team %s", team.name)

        editor = users["editor"]
        if not await is_team_member(db, org.id, team.id, editor.id):
            actions = map_team_permission(PermissionType.ADMIN)
            await team_permissions_service.set_user_permission(db, org.id, editor.id, str(team.id), actions)
            log.info("Made %s admin of team %s", editor.login, team.name)

        await db.commit()

    log.info("Seeding complete")


if __name__ == "__main__":
    asyncio.run(seed())
