"""Turn a rendered listing page into concert records.

Pure over its inputs: the HTML snapshot, the target's selector profile and
the reference date. Nothing here touches a browser, the clock or a store.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

from concertinfo.config import settings
from concertinfo.schemas import ConcertRecord
from concertinfo.services.assembler import CardOutcome, ExtractedFields, assemble_record
from concertinfo.services.dates import normalise_event_datetime
from concertinfo.services.fields import (
    extract_artist,
    extract_detail_link,
    extract_venue,
    find_date_node,
)
from concertinfo.services.selectors import find_event_links, resolve_cascade
from concertinfo.targets.base import SelectorProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionContext:
    profile: SelectorProfile
    reference_date: dt.date
    fallback_location: str
    locale: str = "fr"
    default_time: str = "20:00"
    genre: str = "Concert"
    comment_prefix: str = ""


def build_context(
    profile: SelectorProfile,
    reference_date: dt.date,
    fallback_location: str,
    locale: str = "fr",
) -> ExtractionContext:
    """Context with the configured time/genre/comment defaults."""
    return ExtractionContext(
        profile=profile,
        reference_date=reference_date,
        fallback_location=fallback_location,
        locale=locale,
        default_time=settings.default_time,
        genre=settings.genre_label,
        comment_prefix=settings.comment_prefix,
    )


def extract_card(card: Tag, ctx: ExtractionContext) -> CardOutcome:
    profile = ctx.profile
    when = normalise_event_datetime(
        find_date_node(card, profile.date),
        ctx.reference_date,
        locale=ctx.locale,
        default_time=ctx.default_time,
    )
    fields = ExtractedFields(
        artist=extract_artist(card, profile.artist),
        location=extract_venue(card, profile.venue, ctx.fallback_location),
        date=when.date,
        time=when.time,
        detail_url=extract_detail_link(card, profile.link_marker, profile.origin),
    )
    return assemble_record(fields, genre=ctx.genre, comment_prefix=ctx.comment_prefix)


def extract_link_candidate(anchor: Tag, ctx: ExtractionContext) -> CardOutcome:
    """A bare event link: the anchor text is the artist, everything else defaults."""
    fields = ExtractedFields(
        artist=" ".join(anchor.get_text().split()),
        location=ctx.fallback_location,
        date=ctx.reference_date,
        time=ctx.default_time,
        detail_url=extract_detail_link(anchor, ctx.profile.link_marker, ctx.profile.origin),
    )
    return assemble_record(fields, genre=ctx.genre, comment_prefix=ctx.comment_prefix)


def extract_concerts(
    html: str,
    ctx: ExtractionContext,
    limit: int | None = None,
) -> list[ConcertRecord]:
    """Extract records in DOM order; skipped cards are logged, not raised."""
    soup = BeautifulSoup(html, "html.parser")

    cards = resolve_cascade(soup, ctx.profile.cards)
    if cards:
        extract = extract_card
    else:
        logger.info("No event cards found, falling back to event links")
        cards = find_event_links(soup, ctx.profile.link_marker)
        extract = extract_link_candidate

    if limit is not None:
        cards = cards[:limit]

    records: list[ConcertRecord] = []
    skipped = 0
    for index, card in enumerate(cards):
        outcome = extract(card, ctx)
        if outcome.accepted:
            records.append(outcome.record)
        else:
            skipped += 1
            logger.debug("Skipping card %d: %s", index, outcome.skip_reason)

    if not records:
        logger.warning("No concerts extracted (%d candidates)", len(cards))
    else:
        logger.info("Extracted %d concerts (%d cards skipped)", len(records), skipped)
    return records
