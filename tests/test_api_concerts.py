"""Tests for the /api/concerts endpoints.

Uses an in-memory SQLite database and an httpx ASGI client.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from concertinfo.database import Base, get_session
from concertinfo.models import Concert

# In-memory async engine for tests; StaticPool shares one connection across threads
TEST_ENGINE = create_async_engine(
    "sqlite+aiosqlite://",
    echo=False,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = async_sessionmaker(TEST_ENGINE, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create tables before each test, drop after."""
    async with TEST_ENGINE.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with TEST_ENGINE.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def _override_get_session():
    async with TestSession() as session:
        yield session


def _get_app():
    """Build a minimal FastAPI app with the concerts router."""
    from fastapi import FastAPI

    from concertinfo.routers.concerts import router

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_session] = _override_get_session
    return app


async def _seed() -> list[int]:
    async with TestSession() as session:
        concerts = [
            Concert(artist="Dua Lipa", date=date(2024, 5, 28), time="19:30",
                    location="Accor Arena", genre="Pop / Disco", comments="Radical Optimism Tour"),
            Concert(artist="The Weeknd", date=date(2024, 7, 12), time="20:00",
                    location="Stade de France", genre="R&B / Pop", comments=None),
            Concert(artist="Justice", date=date(2024, 6, 15), time="21:45",
                    location="We Love Green", genre="Electronic", comments="Tête d'affiche festival"),
        ]
        session.add_all(concerts)
        await session.commit()
        return [c.id for c in concerts]


def _client():
    return AsyncClient(transport=ASGITransport(app=_get_app()), base_url="http://test")


@pytest.mark.asyncio
async def test_list_ordered_by_date():
    await _seed()
    async with _client() as client:
        resp = await client.get("/api/concerts")

    assert resp.status_code == 200
    assert [c["artist"] for c in resp.json()] == ["Dua Lipa", "Justice", "The Weeknd"]


@pytest.mark.asyncio
async def test_create_concert():
    payload = {
        "artist": "Air",
        "date": "2026-11-02",
        "time": "20:30",
        "location": "Salle Pleyel",
        "genre": "Electronic",
        "comments": "Moon Safari 25",
    }
    async with _client() as client:
        resp = await client.post("/api/concerts", json=payload)

    assert resp.status_code == 201
    body = resp.json()
    assert body["id"] is not None
    assert body["date"] == "2026-11-02"


@pytest.mark.asyncio
async def test_create_rejects_bad_time_and_blank_artist():
    async with _client() as client:
        bad_time = await client.post("/api/concerts", json={
            "artist": "Air", "date": "2026-11-02", "time": "8pm", "location": "Paris", "genre": "x",
        })
        blank = await client.post("/api/concerts", json={
            "artist": "  ", "date": "2026-11-02", "location": "Paris", "genre": "x",
        })

    assert bad_time.status_code == 422
    assert blank.status_code == 422


@pytest.mark.asyncio
async def test_update_concert():
    ids = await _seed()
    async with _client() as client:
        resp = await client.put(f"/api/concerts/{ids[0]}", json={"time": "21:00", "comments": None})

    assert resp.status_code == 200
    body = resp.json()
    assert body["time"] == "21:00"
    assert body["comments"] is None
    assert body["artist"] == "Dua Lipa"


@pytest.mark.asyncio
async def test_update_missing_concert():
    async with _client() as client:
        resp = await client.put("/api/concerts/999", json={"time": "21:00"})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_concert():
    ids = await _seed()
    async with _client() as client:
        resp = await client.delete(f"/api/concerts/{ids[1]}")
        remaining = await client.get("/api/concerts")

    assert resp.status_code == 204
    assert "The Weeknd" not in [c["artist"] for c in remaining.json()]


@pytest.mark.asyncio
async def test_writes_require_api_key_when_configured():
    with patch("concertinfo.auth.settings.api_key", "secret"):
        async with _client() as client:
            denied = await client.post("/api/concerts", json={
                "artist": "Air", "date": "2026-11-02", "location": "Paris", "genre": "x",
            })
            allowed = await client.post(
                "/api/concerts",
                json={"artist": "Air", "date": "2026-11-02", "location": "Paris", "genre": "x"},
                headers={"X-API-Key": "secret"},
            )

    assert denied.status_code == 401
    assert allowed.status_code == 201
