import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.auth import JwtPayload, get_current_user
from app.config import Settings
from app.main import create_app
from app.models.user import ListItem, User
from app.repositories.in_memory_user_repo import InMemoryUserRepository
from app.repositories.user_repo import MongoUserRepository

TEST_SETTINGS = Settings(
    environment="development",
    user_repository="inmemory",
    region="us-east-1",
    cognito_user_pool_id="us-east-1_testpool",
    cognito_client_id="test-client",
)


@pytest.fixture
def settings():
    return TEST_SETTINGS


@pytest.fixture(params=["inmemory", "mongodb"])
def repo(request):
    # every store-backed test runs against both repositories
    if request.param == "mongodb":
        return MongoUserRepository(AsyncMongoMockClient()["todo"])
    return InMemoryUserRepository()


@pytest.fixture
async def user(repo):
    return await repo.create_user(
        User(
            username="u1",
            sub="sub-1",
            email="u1@example.com",
            toDoList=[ListItem(title="A"), ListItem(title="B")],
        )
    )


@pytest.fixture
def initialized_app(settings, repo):
    app = create_app(settings)
    app.state.user_repository = repo
    # identity is trusted as already verified
    app.dependency_overrides[get_current_user] = lambda: JwtPayload(
        username="u1", sub="sub-1", email="u1@example.com"
    )
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(initialized_app):
    async with AsyncClient(transport=ASGITransport(app=initialized_app), base_url="http://test") as ac:
        yield ac
