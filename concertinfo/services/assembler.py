from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from pydantic import ValidationError

from concertinfo.schemas import ConcertRecord


@dataclass(frozen=True)
class ExtractedFields:
    """Raw per-card values, before the record is validated."""
    artist: str | None
    location: str
    date: dt.date
    time: str
    detail_url: str = ""


@dataclass(frozen=True)
class CardOutcome:
    """Either an assembled record or the reason the card was skipped."""
    record: ConcertRecord | None = None
    skip_reason: str | None = None

    @property
    def accepted(self) -> bool:
        return self.record is not None


def assemble_record(fields: ExtractedFields, *, genre: str, comment_prefix: str) -> CardOutcome:
    if not fields.artist:
        return CardOutcome(skip_reason="no artist")

    comments = f"{comment_prefix}{fields.detail_url}" if fields.detail_url else ""
    try:
        record = ConcertRecord(
            artist=fields.artist,
            date=fields.date,
            time=fields.time,
            location=fields.location,
            genre=genre,
            comments=comments,
        )
    except ValidationError as e:
        return CardOutcome(skip_reason=f"invalid record: {e.error_count()} error(s)")
    return CardOutcome(record=record)
