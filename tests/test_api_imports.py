"""Tests for the /api/imports endpoints with rendering and the store mocked."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from concertinfo.errors import NavigationTimeout, StoreError
from concertinfo.schemas import ConcertOut, ConcertRecord
from concertinfo.services.store import ConcertStore, get_store

FIXTURES = Path(__file__).parent / "fixtures"


class MemoryStore(ConcertStore):
    def __init__(self):
        self.rows: list[ConcertOut] = []

    async def insert(self, record: ConcertRecord) -> ConcertOut:
        if record.artist == "Phoenix":
            raise StoreError("row-level security policy violation")
        row = ConcertOut(id=len(self.rows) + 1, **record.model_dump())
        self.rows.append(row)
        return row


def _client(store: ConcertStore | None = None):
    from fastapi import FastAPI

    from concertinfo.routers.imports import router

    app = FastAPI()
    app.include_router(router)
    app.dependency_overrides[get_store] = lambda: store or MemoryStore()
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.mark.asyncio
async def test_list_targets():
    async with _client() as client:
        resp = await client.get("/api/imports/targets")

    assert resp.status_code == 200
    assert [t["key"] for t in resp.json()] == ["city", "user"]


@pytest.mark.asyncio
async def test_preview_returns_records_only():
    html = (FIXTURES / "lastfm_user_events.html").read_text()
    store = MemoryStore()

    with patch("concertinfo.services.pipeline.render_page", AsyncMock(return_value=html)):
        async with _client(store) as client:
            resp = await client.post("/api/imports/preview", json={"target": "user", "value": "saiff"})

    assert resp.status_code == 200
    assert [r["artist"] for r in resp.json()] == ["Justice", "Fred again..", "Phoenix"]
    assert store.rows == []


@pytest.mark.asyncio
async def test_import_returns_records_and_summary():
    html = (FIXTURES / "lastfm_user_events.html").read_text()
    store = MemoryStore()

    with patch("concertinfo.services.pipeline.render_page", AsyncMock(return_value=html)):
        async with _client(store) as client:
            resp = await client.post("/api/imports", json={"target": "user", "value": "saiff"})

    assert resp.status_code == 200
    body = resp.json()
    assert len(body["records"]) == 3
    assert body["summary"] == {
        "succeeded": 2,
        "failed": 1,
        "failures": [{"record_label": "Phoenix", "reason": "row-level security policy violation"}],
        "cancelled": False,
    }
    assert [r.artist for r in store.rows] == ["Justice", "Fred again.."]


@pytest.mark.asyncio
async def test_navigation_timeout_is_504():
    render = AsyncMock(side_effect=NavigationTimeout("https://www.last.fm/events?location=Paris", "HTTP 503"))

    with patch("concertinfo.services.pipeline.render_page", render):
        async with _client() as client:
            resp = await client.post("/api/imports", json={"target": "city"})

    assert resp.status_code == 504
    assert "HTTP 503" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_unknown_target_is_404():
    async with _client() as client:
        resp = await client.post("/api/imports/preview", json={"target": "venue"})
    assert resp.status_code == 404
