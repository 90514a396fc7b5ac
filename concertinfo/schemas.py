from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field, field_validator

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


# --- Concerts ---
class ConcertRecord(BaseModel):
    """A concert ready to be written to a store.

    Scraped records always carry the fixed genre label and, when the source
    card linked to a detail page, a comment embedding that URL. Records
    entered through the API accept any genre text.
    """
    artist: str = Field(min_length=1)
    date: dt.date
    time: str = Field(default="20:00", pattern=TIME_PATTERN)
    location: str
    genre: str
    comments: str = ""

    @field_validator("artist", "location", mode="before")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip() if isinstance(v, str) else v


# Records created from the API use the same shape
ConcertCreate = ConcertRecord


class ConcertUpdate(BaseModel):
    artist: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    time: str | None = Field(default=None, pattern=TIME_PATTERN)
    location: str | None = None
    genre: str | None = None
    comments: str | None = None


class ConcertOut(BaseModel):
    id: int
    artist: str
    date: dt.date
    time: str
    location: str
    genre: str
    comments: str | None

    model_config = {"from_attributes": True}


# --- Imports ---
class ImportRequest(BaseModel):
    target: str = "user"
    value: str | None = None  # city name or username; target default when omitted
    limit: int | None = Field(default=None, ge=1)


class ImportFailure(BaseModel):
    record_label: str
    reason: str


class ImportSummary(BaseModel):
    succeeded: int = 0
    failed: int = 0
    failures: list[ImportFailure] = []
    cancelled: bool = False


class ImportResult(BaseModel):
    records: list[ConcertRecord]
    summary: ImportSummary


class TargetOut(BaseModel):
    key: str
    default_value: str
    example_url: str
