"""
Filmovi API — Movie Endpoint Tests
===================================

What:  HTTP-level tests for /filmovi.
How:   HTTPX AsyncClient against create_app() with a SQLite-backed Database.

What we test:
    ✅ Full lifecycle: POST → GET → PUT → DELETE → GET 404
    ✅ Status codes and bodies for each endpoint
    ✅ 404 envelope carries a message
    ✅ Schema rejections (422) never reach storage
    ✅ Storage failures become a 500 JSON envelope
    ✅ Every 500, including the catch-all one, carries X-Request-ID
"""

import logging

import pytest
from httpx import AsyncClient, ASGITransport

from filmovi.main import create_app


class TestMovieLifecycle:
    """The scenario a client typically walks through."""

    @pytest.mark.asyncio
    async def test_create_read_update_delete(self, test_client, sample_movie_data):
        # Create
        response = await test_client.post("/filmovi", json=sample_movie_data)
        assert response.status_code == 201
        created = response.json()
        assert created["naslov"] == "Inception"
        assert created["godina"] == 2010
        assert created["zanr"] == "Sci-Fi"
        assert isinstance(created["id"], int)
        assert created["created_at"]

        movie_url = f"/filmovi/{created['id']}"

        # Read back
        response = await test_client.get(movie_url)
        assert response.status_code == 200
        assert response.json() == created

        # Partial update
        response = await test_client.put(movie_url, json={"godina": 2011})
        assert response.status_code == 200
        updated = response.json()
        assert updated["naslov"] == "Inception"
        assert updated["godina"] == 2011
        assert updated["zanr"] == "Sci-Fi"

        # Delete
        response = await test_client.delete(movie_url)
        assert response.status_code == 204
        assert response.content == b""

        # Gone
        response = await test_client.get(movie_url)
        assert response.status_code == 404
        assert response.json()["message"]


class TestListMovies:
    """Tests for GET /filmovi."""

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/filmovi")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_returns_all_created(self, test_client):
        for naslov in ("Alien", "Aliens", "Alien 3"):
            await test_client.post("/filmovi", json={"naslov": naslov})

        response = await test_client.get("/filmovi")

        assert response.status_code == 200
        assert sorted(m["naslov"] for m in response.json()) == ["Alien", "Alien 3", "Aliens"]


class TestNotFound:
    """Unknown ids answer 404 with the standard error envelope."""

    @pytest.mark.asyncio
    async def test_get_missing(self, test_client):
        response = await test_client.get("/filmovi/999")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert body["message"] == "Film nije pronađen"
        assert body["request_id"] == response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_update_missing(self, test_client):
        response = await test_client.put("/filmovi/999", json={"naslov": "Duh"})

        assert response.status_code == 404
        assert response.json()["message"] == "Film nije pronađen"

        listing = await test_client.get("/filmovi")
        assert listing.json() == []

    @pytest.mark.asyncio
    async def test_delete_missing(self, test_client, sample_movie_data):
        await test_client.post("/filmovi", json=sample_movie_data)

        response = await test_client.delete("/filmovi/999")

        assert response.status_code == 404
        assert response.json()["message"] == "Film nije pronađen"
        listing = await test_client.get("/filmovi")
        assert len(listing.json()) == 1


class TestRequestValidation:
    """Bodies and ids that fail the schema are rejected before any SQL runs."""

    @pytest.mark.asyncio
    async def test_create_without_naslov(self, test_client):
        response = await test_client.post("/filmovi", json={"godina": 2010})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_with_empty_naslov(self, test_client):
        response = await test_client.post("/filmovi", json={"naslov": ""})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_with_empty_naslov(self, test_client, sample_movie_data):
        """PUT cannot store the empty title that POST rejects."""
        created = (await test_client.post("/filmovi", json=sample_movie_data)).json()

        response = await test_client.put(f"/filmovi/{created['id']}", json={"naslov": ""})

        assert response.status_code == 422
        fetched = await test_client.get(f"/filmovi/{created['id']}")
        assert fetched.json()["naslov"] == "Inception"

    @pytest.mark.asyncio
    async def test_non_numeric_id(self, test_client):
        response = await test_client.get("/filmovi/abc")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_null_field_is_ignored(self, test_client, sample_movie_data):
        created = (await test_client.post("/filmovi", json=sample_movie_data)).json()

        response = await test_client.put(
            f"/filmovi/{created['id']}", json={"naslov": None, "zanr": "Thriller"}
        )

        assert response.status_code == 200
        assert response.json()["naslov"] == "Inception"
        assert response.json()["zanr"] == "Thriller"


class TestStorageFailure:
    """A failing database surfaces as a uniform 500 JSON envelope."""

    @pytest.mark.asyncio
    async def test_list_when_database_is_down(self, broken_database):
        app = create_app(database=broken_database)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/filmovi", headers={"X-Request-ID": "abc12345"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert body["request_id"] == "abc12345"
        # Driver details stay in the server log
        assert "refused" not in body["message"]

    @pytest.mark.asyncio
    async def test_create_when_database_is_down(self, broken_database, sample_movie_data):
        app = create_app(database=broken_database)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post("/filmovi", json=sample_movie_data)

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"

    @pytest.mark.asyncio
    async def test_refused_connection_is_a_server_error(self, refused_database):
        """A raw ConnectionRefusedError from the driver is still a storage failure."""
        app = create_app(database=refused_database)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/filmovi", headers={"X-Request-ID": "conn0001"})

        assert response.status_code == 500
        assert response.json()["error"] == "server_error"
        assert response.json()["request_id"] == "conn0001"
        assert response.headers["X-Request-ID"] == "conn0001"

    @pytest.mark.asyncio
    async def test_unexpected_error_keeps_request_id(self, crashing_database):
        """The catch-all 500 is sent outside the middleware and still echoes the ID."""
        app = create_app(database=crashing_database)
        # Starlette re-raises after sending the 500; keep the response instead
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/filmovi", headers={"X-Request-ID": "boom0001"})

        assert response.status_code == 500
        assert response.json()["error"] == "internal_server_error"
        assert response.headers["X-Request-ID"] == "boom0001"

    @pytest.mark.asyncio
    async def test_storage_failure_is_logged_once(self, broken_database, caplog):
        """The repository logs the cause; the 500 handler does not log it again."""
        app = create_app(database=broken_database)
        transport = ASGITransport(app=app)
        with caplog.at_level(logging.ERROR):
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                await client.get("/filmovi/3")

        errors = [r for r in caplog.records if r.levelno == logging.ERROR and r.name != "filmovi.access"]
        assert [r.name for r in errors] == ["filmovi.repositories.movie_repository"]
        assert errors[0].exc_info is not None
