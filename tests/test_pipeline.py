"""Pipeline tests with rendering mocked out: render → extract → import."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from concertinfo.errors import NavigationTimeout, StoreError
from concertinfo.schemas import ConcertOut, ConcertRecord
from concertinfo.services.store import ConcertStore

FIXTURES = Path(__file__).parent / "fixtures"
REF = date(2026, 10, 18)


class RecordingStore(ConcertStore):
    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.inserted: list[str] = []

    async def insert(self, record: ConcertRecord) -> ConcertOut:
        if record.artist == self.fail_on:
            raise StoreError("permission denied for table concerts")
        self.inserted.append(record.artist)
        return ConcertOut(id=len(self.inserted), **record.model_dump())


@pytest.mark.asyncio
async def test_scrape_user_listing():
    html = (FIXTURES / "lastfm_user_events.html").read_text()
    render = AsyncMock(return_value=html)

    with patch("concertinfo.services.pipeline.render_page", render):
        from concertinfo.services.pipeline import scrape_concerts

        records = await scrape_concerts("user", "saiff", reference_date=REF)

    assert [r.artist for r in records] == ["Justice", "Fred again..", "Phoenix"]
    args, kwargs = render.call_args
    assert args == ("https://www.last.fm/fr/user/saiff/events",)
    assert kwargs["grace_seconds"] == 5.0


@pytest.mark.asyncio
async def test_blank_value_uses_target_default():
    render = AsyncMock(return_value="<html></html>")

    with patch("concertinfo.services.pipeline.render_page", render):
        from concertinfo.services.pipeline import scrape_concerts

        records = await scrape_concerts("city", "  ", reference_date=REF)

    assert records == []
    assert render.call_args.args == ("https://www.last.fm/events?location=Paris",)


@pytest.mark.asyncio
async def test_city_limit_and_fallback_location():
    html = (FIXTURES / "lastfm_city_events.html").read_text()

    with patch("concertinfo.services.pipeline.render_page", AsyncMock(return_value=html)):
        from concertinfo.services.pipeline import scrape_concerts

        records = await scrape_concerts("city", "London", limit=2, reference_date=REF)

    assert [(r.artist, r.location) for r in records] == [
        ("Wet Leg", "O2 Academy Brixton"),
        ("Fontaines D.C.", "London"),
    ]


@pytest.mark.asyncio
async def test_run_import_collects_store_failures():
    html = (FIXTURES / "lastfm_user_events.html").read_text()
    store = RecordingStore(fail_on="Fred again..")

    with patch("concertinfo.services.pipeline.render_page", AsyncMock(return_value=html)):
        from concertinfo.services.pipeline import run_import

        result = await run_import("user", "saiff", store=store, reference_date=REF)

    assert len(result.records) == 3
    assert store.inserted == ["Justice", "Phoenix"]
    assert result.summary.succeeded == 2
    assert result.summary.failed == 1
    assert result.summary.failures[0].record_label == "Fred again.."
    assert result.summary.failures[0].reason == "permission denied for table concerts"


@pytest.mark.asyncio
async def test_navigation_timeout_fails_run_without_import():
    store = RecordingStore()
    render = AsyncMock(side_effect=NavigationTimeout("https://www.last.fm/fr/user/x/events", "not settled"))

    with patch("concertinfo.services.pipeline.render_page", render):
        from concertinfo.services.pipeline import run_import

        with pytest.raises(NavigationTimeout):
            await run_import("user", "x", store=store)

    assert store.inserted == []
