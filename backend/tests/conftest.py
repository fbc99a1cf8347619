"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator, Awaitable, Callable, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from core.auth import TOKEN_HEADER
from models.base import Base
from models.user import User
from services import auth_service

# Minimum bcrypt work factor keeps registration fast in tests
os.environ["BOOKMARKER_BCRYPT_ROUNDS"] = "4"


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer]:
    """Start a PostgreSQL container for the test session."""
    with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
        yield postgres


@pytest.fixture(scope="session")
def database_url(postgres_container: PostgresContainer) -> str:
    """
    Get the database URL from the container and set it in environment.

    Set before settings are (re)loaded so the app points at the container.
    """
    url = postgres_container.get_connection_url()
    os.environ["BOOKMARKER_DATABASE_URL"] = url
    return url


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine for testing."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_connection(async_engine: AsyncEngine) -> AsyncGenerator[AsyncConnection]:
    """
    Create a connection with a transaction that will be rolled back after the test.

    This provides test isolation - each test runs in its own transaction
    that is rolled back, so tests don't affect each other.
    """
    async with async_engine.connect() as connection:
        transaction = await connection.begin()
        try:
            yield connection
        finally:
            await transaction.rollback()


@pytest.fixture
async def db_session(db_connection: AsyncConnection) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session bound to the test transaction.

    Uses savepoints, allowing the session's flush/rollback to work within
    our outer test transaction.
    """
    session_factory = async_sessionmaker(
        bind=db_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    db_session: AsyncSession,
) -> AsyncGenerator[AsyncClient]:
    """Create an unauthenticated test client with database session override."""
    # Clear the settings cache so it picks up BOOKMARKER_* from environment
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


RegisterUser = Callable[..., Awaitable[tuple[User, str]]]


@pytest.fixture
def make_user(db_session: AsyncSession) -> RegisterUser:
    """Factory that registers a user through the credential store and returns (user, token)."""

    async def _make_user(
        email: str,
        password: str = "correct-horse-battery",
    ) -> tuple[User, str]:
        token = await auth_service.register_user(db_session, email, password)
        user = await auth_service.resolve_token(db_session, token)
        assert user is not None
        return user, token

    return _make_user


@pytest.fixture
async def test_user(make_user: RegisterUser) -> tuple[User, str]:
    """A registered user and their session token."""
    return await make_user("alice@example.com")


@pytest.fixture
async def other_user(make_user: RegisterUser) -> tuple[User, str]:
    """A second registered user for isolation tests."""
    return await make_user("bob@example.com")


@pytest.fixture
def auth_headers(test_user: tuple[User, str]) -> dict[str, str]:
    """Token header for the primary test user."""
    _, token = test_user
    return {TOKEN_HEADER: token}


@pytest.fixture
def other_headers(other_user: tuple[User, str]) -> dict[str, str]:
    """Token header for the second test user."""
    _, token = other_user
    return {TOKEN_HEADER: token}
