"""Pytest fixtures for API integration tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from hms.presentation.api.app import API_V1_PREFIX, create_app
from hms.presentation.api.config import get_api_settings
from hms.presentation.api.dependencies import get_db_session
from hms_config.settings import Settings


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings() -> Settings:
    """Test API settings with debug enabled and cheap bcrypt."""
    return Settings(
        _env_file=None,
        api_host="127.0.0.1",
        api_port=8000,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        bcrypt_rounds=4,
    )


@pytest.fixture
def test_app(api_settings, db_engine):
    """Create the application wired to the in-memory test database."""
    app = create_app(settings=api_settings)

    test_session_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db_session():
        async with test_session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings

    return app


@pytest.fixture
def test_client(test_app) -> TestClient:
    """Create a test client with an in-memory database."""
    return TestClient(test_app)


@pytest.fixture
def staff_user_data() -> dict:
    """Staff account used across API tests."""
    return {
        "username": "doctor",
        "password": "doctor123",
        "role": "DOCTOR",
        "name": "Dr. John Smith",
        "email": "doctor@hospital.com",
        "phone": "+1-555-0002",
    }


@pytest.fixture
def staff_user(test_client, staff_user_data, api_v1_prefix) -> dict:
    """Create the staff account through the API and return its JSON."""
    response = test_client.post(f"{api_v1_prefix}/users", json=staff_user_data)
    assert response.status_code == 201, response.text
    return response.json()
