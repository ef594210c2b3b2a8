import os

# main builds a module-level app at import time; keep it off PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings
from app.database import Database
from app.models import User, Role
from app.services.integrity import IntegrityManager
from app.schemas import AgentCreate, TeamMemberCreate, TaskCreate
from app.utils.security import create_access_token, hash_password
from main import create_app

TEST_PASSWORD = "testpassword"


@pytest.fixture(scope="session")
def password_hash():
    # bcrypt is slow on purpose; hash once per run
    return hash_password(TEST_PASSWORD)


@pytest.fixture
def settings():
    return Settings(
        database_url="sqlite://",
        secret_key="test-secret-key",
        cors_origins=[],
        auto_create_tables=False,
    )


@pytest.fixture
def database(settings):
    database = Database(settings.database_url)
    database.create_tables()
    yield database
    database.drop_tables()
    database.dispose()


@pytest.fixture
def db(database):
    with database.session() as session:
        yield session


@pytest.fixture
def manager(db):
    return IntegrityManager(db)


@pytest.fixture
def client(settings, database):
    return TestClient(create_app(settings, database))


@pytest.fixture
def users(db, password_hash):
    created = {}
    for role in Role:
        user = User(
            username=f"Test {role.value}",
            email=f"{role.value}@example.com",
            password_hash=password_hash,
            role=role.value,
        )
        db.add(user)
        created[role.value] = user
    db.commit()
    for user in created.values():
        db.refresh(user)
    return created


def _auth_headers(user, settings):
    return {"Authorization": f"Bearer {create_access_token(user, settings)}"}


@pytest.fixture
def hr_headers(users, settings):
    return _auth_headers(users["hr"], settings)


@pytest.fixture
def agent_headers(users, settings):
    return _auth_headers(users["agent"], settings)


@pytest.fixture
def member_headers(users, settings):
    return _auth_headers(users["member"], settings)


@pytest.fixture
def agent(manager):
    return manager.create_agent(AgentCreate(
        name="John Smith",
        role="Senior Agent",
        office="New York",
        region="Northeast",
        skills=["sales", "negotiation"],
    ))


@pytest.fixture
def team_member(manager, agent):
    return manager.create_team_member(TeamMemberCreate(
        name="Mike Brown",
        role="Sales Associate",
        agent_id=agent.id,
    ))


@pytest.fixture
def task(manager, team_member):
    return manager.create_task(TaskCreate(
        title="Test Task",
        assigned_to=team_member.id,
        due_date="2025-12-01",
    ))
