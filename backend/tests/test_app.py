import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_root(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_readiness_checks_database(client: AsyncClient):
    response = await client.get("/api/v1/health/ready")

    assert response.status_code == 200
    assert response.json()["checks"]["database"]["status"] == "healthy"


@pytest.mark.asyncio
async def test_response_headers(client: AsyncClient):
    response = await client.get("/api/v1/health/live", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
    assert "X-Response-Time" in response.headers
    assert response.headers["X-Content-Type-Options"] == "nosniff"


@pytest.mark.asyncio
async def test_unknown_body_field_is_rejected(client: AsyncClient):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "a@college.edu", "password": "x", "remember": True},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
