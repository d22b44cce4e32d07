"""
GalaxyAPI test fixtures.

Tests run against a throwaway SQLite database (aiosqlite) and an in-memory
directory. Environment overrides must be set before `galaxy_api` is imported.
"""
import os

os.environ["DATABASE_HOST"] = "sqlite"
os.environ["SERVICE_LOG_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["JWT_ENABLED"] = "true"
os.environ["JWT_SECRET_KEY"] = "galaxy-test-secret-key-0123456789-abcdefghijklmnop"
os.environ["SSO_VERIFY_SIGNATURE"] = "false"

import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

import httpx
import jwt
import pytest

from galaxy_api.config import settings
from galaxy_api.database.base import Database
from galaxy_api.database import models as orm
from galaxy_api.types.models.directory import DirectoryGroup, DirectoryUser
from galaxy_api.types.response.exceptions import HandledException
from galaxy_api.types.response.response_code import ResponseCode


def new_id() -> str:
    return str(uuid.uuid4())


# ============================================================
# Directory
# ============================================================

class FakeDirectory:
    """In-memory directory: users, user -> groups and group -> parent groups."""

    def __init__(self):
        self.users: Dict[str, DirectoryUser] = {}
        self.user_groups: Dict[str, List[str]] = {}
        self.group_parents: Dict[str, List[str]] = {}
        self.group_names: Dict[str, str] = {}
        self.fail_on_group: Optional[str] = None
        self.group_calls: List[str] = []

    def add_user(self, user_id: str, *group_ids: str, name: str = None):
        self.users[user_id] = DirectoryUser(id=user_id, display_name=name or user_id, user_principal_name=user_id)
        self.user_groups[user_id] = list(group_ids)

    def nest(self, child_group: str, *parent_groups: str):
        self.group_parents.setdefault(child_group, []).extend(parent_groups)

    async def find_user(self, user_id: str) -> Optional[DirectoryUser]:
        return self.users.get(user_id)

    async def get_group_membership_for_user(self, user_id: str) -> List[DirectoryGroup]:
        return [DirectoryGroup(id=g, display_name=self.group_names.get(g)) for g in self.user_groups.get(user_id, [])]

    async def get_group_membership_for_group(self, group_id: str) -> List[DirectoryGroup]:
        self.group_calls.append(group_id)
        if group_id == self.fail_on_group:
            raise HandledException(ResponseCode.DIRECTORY_ERROR, msg="directory unavailable")
        return [DirectoryGroup(id=g, display_name=self.group_names.get(g)) for g in self.group_parents.get(group_id, [])]

    async def find_groups(self, starts_with: str, limit: int) -> List[DirectoryGroup]:
        matches = sorted(
            (gid for gid, name in self.group_names.items() if name.lower().startswith(starts_with.lower())),
            key=lambda gid: self.group_names[gid],
        )
        return [DirectoryGroup(id=gid, display_name=self.group_names[gid]) for gid in matches[:limit]]


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()


# ============================================================
# Database
# ============================================================

@pytest.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'galaxy_test.db'}")
    await db.create_database()
    yield db
    await db.close()


async def seed(database: Database, *rows):
    """Insert ORM rows in one committed session."""
    async with database.session() as session:
        session.add_all(rows)
        await session.commit()


class Catalog:
    """Reference data shared by most tests."""

    def __init__(self):
        self.component_tag_type = orm.TagType(id=new_id(), name=settings.component_tag_type_name, system_name="comit")
        self.other_tag_type = orm.TagType(id=new_id(), name="Queue", system_name="comit")

        self.view_settings = orm.PermissionType(
            id=new_id(), name="View Settings", code="SYS_VIEW", is_system_permission=True, system_name="comit"
        )
        self.edit_groups = orm.PermissionType(
            id=new_id(), name="Edit Groups", code="SYS_GROUPS", is_system_permission=True, system_name="comit"
        )
        self.tag_read = orm.PermissionType(
            id=new_id(), name="Read", code="TAG_READ", is_system_permission=False, system_name="comit"
        )
        self.tag_write = orm.PermissionType(
            id=new_id(), name="Write", code="TAG_WRITE", is_system_permission=False, system_name="comit"
        )
        self.foreign_type = orm.PermissionType(
            id=new_id(), name="Other", code="OTHER", is_system_permission=True, system_name="other"
        )

        self.interface = orm.ComponentType(id=new_id(), name="Interface")
        self.lab = orm.Category(id=new_id(), name="Lab")
        self.pharmacy = orm.Category(id=new_id(), name="Pharmacy")

        self.adt_feed = orm.Component(
            id=new_id(), name="ADT Feed", component_type_id=self.interface.id, category_id=self.lab.id,
            alert_email="old@example.com", alert_phone="555-0100",
            disable_notify=False, stage_status=False, auto_start=True,
        )
        self.orders_feed = orm.Component(
            id=new_id(), name="Orders Feed", component_type_id=self.interface.id, category_id=None,
            disable_notify=False, stage_status=True, auto_start=False,
        )

    def rows(self) -> Iterable:
        return [
            self.component_tag_type, self.other_tag_type,
            self.view_settings, self.edit_groups, self.tag_read, self.tag_write, self.foreign_type,
            self.interface, self.lab, self.pharmacy,
            self.adt_feed, self.orders_feed,
        ]


@pytest.fixture
async def catalog(database) -> Catalog:
    data = Catalog()
    await seed(database, *data.rows())
    return data


# ============================================================
# HTTP
# ============================================================

def make_token(user_id: str = "tester@example.com", expires_in: int = 600, secret: str = None) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "name": "Tester",
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=expires_in)).timestamp()),
        "iss": settings.jwt_issuer,
    }
    return jwt.encode(payload, secret or settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def app(database, directory):
    from galaxy_api.core.dependencies import get_database, get_directory_client
    from galaxy_api.main import app as galaxy_app

    galaxy_app.dependency_overrides[get_database] = lambda: database
    galaxy_app.dependency_overrides[get_directory_client] = lambda: directory
    yield galaxy_app
    galaxy_app.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://galaxy.test") as http_client:
        yield http_client
