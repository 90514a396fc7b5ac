from __future__ import annotations

import asyncio
import logging
import time
from datetime import date

from concertinfo.errors import RenderError
from concertinfo.metrics import RENDER_FAILURES_TOTAL, SCRAPE_DURATION_SECONDS, SCRAPE_RECORDS_FOUND
from concertinfo.schemas import ConcertRecord, ImportResult
from concertinfo.services.extractor import build_context, extract_concerts
from concertinfo.services.fetcher import render_page
from concertinfo.services.importer import import_concerts
from concertinfo.services.store import ConcertStore, get_store
from concertinfo.targets.registry import get_target

logger = logging.getLogger(__name__)


async def scrape_concerts(
    target_key: str,
    value: str | None = None,
    *,
    limit: int | None = None,
    reference_date: date | None = None,
    cancel: asyncio.Event | None = None,
) -> list[ConcertRecord]:
    """Render a target listing and extract its concerts: render → extract.

    ``reference_date`` is what undated cards fall back to (today when not
    given). Render failures propagate; an empty listing is an empty list.
    """
    target = get_target(target_key)
    value = (value or "").strip() or target.default_value
    url = target.build_url(value)
    logger.info("Scraping %s listing for '%s' (%s)", target.key, value, url)

    started = time.monotonic()
    try:
        html = await render_page(
            url,
            grace_seconds=target.settle_grace_seconds,
            ready_selector=target.ready_selector,
            cancel=cancel,
        )
    except RenderError as e:
        RENDER_FAILURES_TOTAL.labels(target=target.key, error_type=type(e).__name__).inc()
        logger.error("Render failed for %s: %s", url, e)
        raise

    ctx = build_context(
        target.profile,
        reference_date or date.today(),
        target.fallback_location(value),
        locale=target.locale,
    )
    records = extract_concerts(html, ctx, limit=limit or target.default_limit)

    SCRAPE_DURATION_SECONDS.labels(target=target.key).observe(time.monotonic() - started)
    SCRAPE_RECORDS_FOUND.labels(target=target.key).set(len(records))
    return records


async def run_import(
    target_key: str,
    value: str | None = None,
    *,
    store: ConcertStore | None = None,
    limit: int | None = None,
    reference_date: date | None = None,
    cancel: asyncio.Event | None = None,
) -> ImportResult:
    """Scrape a target and insert every extracted record into ``store``."""
    records = await scrape_concerts(
        target_key, value, limit=limit, reference_date=reference_date, cancel=cancel
    )
    store = store or get_store()
    summary = await import_concerts(records, store, cancel=cancel)
    return ImportResult(records=records, summary=summary)
