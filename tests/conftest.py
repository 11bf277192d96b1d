"""Test fixtures and configuration."""
import os
from collections.abc import Callable, Generator

# Required settings must exist before the application module is imported
os.environ.setdefault("JWT_KEY", "test-signing-key-minimum-32-characters-long")
os.environ.setdefault("JWT_ISSUER", "todo-api-tests")
os.environ.setdefault("JWT_AUDIENCE", "todo-api-clients")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_CREATE_TABLES", "false")
os.environ.setdefault("OTEL_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from todo_api.config import Settings, get_settings  # noqa: E402
from todo_api.database import Base, enable_sqlite_foreign_keys, get_db  # noqa: E402
from todo_api.main import app  # noqa: E402


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Get test settings."""
    return Settings(
        _env_file=None,
        database_url="sqlite:///:memory:",
        jwt_key="test-signing-key-minimum-32-characters-long",
        jwt_issuer="todo-api-tests",
        jwt_audience="todo-api-clients",
        jwt_expire_minutes=60,
        environment="test",
        otel_enabled=False,
    )


@pytest.fixture(scope="function")
def db_engine(test_settings):
    """Create a test database engine."""
    engine = create_engine(
        test_settings.database_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", enable_sqlite_foreign_keys)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session, test_settings) -> Generator[TestClient, None, None]:
    """Create a test client."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    def override_get_settings():
        return test_settings

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = override_get_settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {
        "username": "alice",
        "password": "pw123",
    }


@pytest.fixture
def test_task_data():
    """Sample task data for testing."""
    return {
        "name": "buy milk",
        "isComplete": False,
    }


@pytest.fixture
def login_as(client: TestClient) -> Callable[[str, str], dict[str, str]]:
    """Register a user and return Authorization headers for them."""

    def _login_as(username: str, password: str = "secret-password") -> dict[str, str]:
        client.post("/auth/register", json={"username": username, "password": password})
        response = client.post("/auth/login", json={"username": username, "password": password})
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login_as
