"""
Tests for the HTTP transport shell
"""

import httpx
import pytest
import pytest_asyncio

from membergraph.api.app import create_app


@pytest_asyncio.fixture
async def client(repositories):
    app = create_app(repositories=repositories)
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestGraphQLEndpoint:
    @pytest.mark.asyncio
    async def test_query(self, client, repositories):
        alice = await repositories.users.create({"name": "Alice", "balance": 1.0})

        response = await client.post(
            "/graphql",
            json={
                "query": "query Get($id: UUID!) { user(id: $id) { name } }",
                "variables": {"id": alice.id},
            },
        )

        assert response.status_code == 200
        assert response.json() == {"data": {"user": {"name": "Alice"}}}

    @pytest.mark.asyncio
    async def test_errors_use_envelope(self, client):
        response = await client.post("/graphql", json={"query": "{ users { id "})

        assert response.status_code == 200
        body = response.json()
        assert body["data"] is None
        assert body["errors"]

    @pytest.mark.asyncio
    async def test_extra_top_level_field_is_rejected(self, client):
        response = await client.post(
            "/graphql", json={"query": "{ users { id } }", "operationName": "X"}
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_missing_query_is_rejected(self, client):
        response = await client.post("/graphql", json={"variables": {}})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.post(
            "/graphql",
            json={"query": "{ memberTypes { id } }"},
            headers={"X-Request-ID": "req-123"},
        )

        assert response.headers["X-Request-ID"] == "req-123"


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
