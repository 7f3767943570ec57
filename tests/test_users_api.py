"""Tests for the HTTP surface: users endpoint, error mapping and health checks."""

import httpx
import pytest
import pytest_asyncio

from appserver.main import create_application
from appserver.modules.user_profiles.infrastructure.database import seed_default_data
from appserver.shared.config.settings import Settings
from appserver.shared.infrastructure.database.connection import db_manager
from appserver.shared.infrastructure.database.session import get_db_session


@pytest.fixture
def app(session_factory):
    application = create_application(Settings(ENVIRONMENT="test"))

    async def override_get_db_session():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_db_session] = override_get_db_session
    return application


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture
async def seeded(context):
    await seed_default_data(context)


class TestGetUser:
    async def test_returns_profile(self, client, seeded):
        response = await client.get("/api/v1/users/admin")

        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == "admin"
        assert body["email"] == "admin@gmail.com"
        assert body["full_name"] == "Admin Admin"
        assert body["birthday"] == "1990-01-01"
        assert body["realm_id"] == "example-com"
        assert body["realm_name"] == "EXAMPLE.COM"

    async def test_unknown_user_is_404(self, client, seeded):
        response = await client.get("/api/v1/users/nobody")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "NOT_FOUND"
        assert error["status_code"] == 404
        assert error["details"]["resource_id"] == "nobody"

    async def test_dangling_realm_is_500(self, client, context, user_profiles, make_profile):
        await user_profiles.add(make_profile(user_id="U2", realm_id="R404"))
        await context.commit()

        response = await client.get("/api/v1/users/U2")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "DATA_INTEGRITY_ERROR"

    async def test_invalid_stored_profile_is_500(self, client, corrupted_profile):
        response = await client.get("/api/v1/users/legacy")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "DATA_INTEGRITY_ERROR"

    async def test_blank_user_id_is_422(self, client):
        response = await client.get("/api/v1/users/%20%20")
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_request_id_is_echoed(self, client, seeded):
        response = await client.get("/api/v1/users/nobody", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert response.json()["error"]["request_id"] == "req-123"
        assert "X-Response-Time" in response.headers


class TestHealth:
    async def test_liveness(self, client):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["service"] == "appserver"

    async def test_database_health_without_engine(self, client):
        response = await client.get("/api/v1/health/database")

        assert response.status_code == 503
        assert response.json()["component"] == "database"
        assert response.json()["status"] == "unhealthy"

    async def test_database_health_with_engine(self, client, engine):
        await db_manager.initialize(engine)
        try:
            response = await client.get("/api/v1/health/database")
        finally:
            await db_manager.close()

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
