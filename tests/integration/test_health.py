"""
Integration tests for the health endpoint.
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.db.session import get_session
from app.main import app


@pytest.mark.integration
@pytest.mark.asyncio
class TestHealthEndpoint:

    async def test_healthy(self, client: AsyncClient):
        response = await client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "database": "ok"}

    async def test_database_down_is_503(self, client: AsyncClient):
        class BrokenSession:
            async def execute(self, *args, **kwargs):
                raise OperationalError("SELECT 1", {}, Exception("connection refused"))

        async def broken_session():
            yield BrokenSession()

        app.dependency_overrides[get_session] = broken_session

        response = await client.get("/api/v1/health")

        assert response.status_code == 503
        assert response.json() == {"status": "degraded", "database": "unavailable"}
