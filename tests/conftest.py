from types import SimpleNamespace

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from teamhub.core import config
from teamhub.core.database.base import Base
from teamhub.core.database.engine import get_db, import_models
from teamhub.features.organizations.models import Organization, OrgRole, user_organizations
from teamhub.features.teams.models import PermissionType, Team
from teamhub.features.teams.permissions import map_team_permission, team_permissions_service
from teamhub.features.teams.settings import TeamSettings, get_team_settings
from teamhub.features.users.models import User
from teamhub.main import app

TEST_JWT_SECRET = "test-secret"


@pytest.fixture
async def session_factory(tmp_path):
    """Fresh SQLite database file per test."""
    import_models()
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


async def add_user(db, org_id, user_id, login, role, **kwargs) -> User:
    user = User(
        id=user_id,
        login=login,
        email=kwargs.pop("email", f"{login}@example.com"),
        name=login.title(),
        current_organization_id=org_id,
        **kwargs,
    )
    db.add(user)
    await db.flush()
    await db.execute(
        user_organizations.insert().values(user_id=user.id, organization_id=org_id, role=role.value)
    )
    return user


async def add_member(db, org_id, team_id, user_id, permission=PermissionType.MEMBER, external=False):
    actions = map_team_permission(permission)
    await team_permissions_service.set_user_permission(
        db, org_id, user_id, str(team_id), actions, external=external
    )


@pytest.fixture
async def seed(db):
    """
    Org 1 "Main Org." with team 3 "platform", org 2 with team 4 "other".

    users: 1 org admin, 2 editor and platform team admin, 3 viewer,
    5 plain user not on any team, 6 member of platform, 7 server admin in org 2.
    """
    db.add_all([Organization(id=1, name="Main Org."), Organization(id=2, name="Other Org.")])
    await db.flush()
    db.add_all([Team(id=3, organization_id=1, name="platform"), Team(id=4, organization_id=2, name="other")])
    await db.flush()

    ns = SimpleNamespace()
    ns.org_admin = await add_user(db, 1, 1, "orgadmin", OrgRole.ADMIN)
    ns.team_admin = await add_user(db, 1, 2, "editor", OrgRole.EDITOR)
    ns.viewer = await add_user(db, 1, 3, "viewer", OrgRole.VIEWER)
    ns.user = await add_user(db, 1, 5, "u5", OrgRole.VIEWER)
    ns.member = await add_user(db, 1, 6, "member", OrgRole.VIEWER, auth_module="oauth_github")
    ns.server_admin = await add_user(db, 2, 7, "root", OrgRole.VIEWER, is_admin=True)

    await add_member(db, 1, 3, ns.team_admin.id, PermissionType.ADMIN)
    await add_member(db, 1, 3, ns.member.id, PermissionType.MEMBER, external=True)
    await db.commit()
    return ns


@pytest.fixture
def settings():
    return TeamSettings()


@pytest.fixture
async def client(session_factory, settings, monkeypatch):
    monkeypatch.setattr(config, "JWT_SECRET", TEST_JWT_SECRET)

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_team_settings] = lambda: settings
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a seeded user."""
    def make(user: User) -> dict:
        token = jwt.encode({"sub": user.login}, TEST_JWT_SECRET, algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}
    return make
