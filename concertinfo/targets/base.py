from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SelectorProfile:
    """Where the pieces of an event card live in a listing page's markup.

    Every selector list is ordered most-specific first. ``cards`` is the
    selector cascade for locating event cards; the field chains are scoped
    to one card. ``link_marker`` identifies event detail hrefs and ``origin``
    is what relative hrefs are resolved against.
    """
    cards: tuple[str, ...]
    artist: tuple[str, ...]
    venue: tuple[str, ...]
    date: tuple[str, ...]
    link_marker: str
    origin: str


class TargetResolver(ABC):
    """Base class for listing pages a run can scrape.

    A target turns the caller's input (a city, a username) into a render
    URL and carries the per-page knobs the pipeline needs: how long to let
    client-side rendering settle, which month-name table the dates use and
    what to fall back to when a card has no venue.
    """

    key: str = ""
    locale: str = "en"
    settle_grace_seconds: float = 3.0
    ready_selector: str | None = None
    default_limit: int | None = None

    @property
    @abstractmethod
    def default_value(self) -> str:
        """Input used when the caller supplies none."""
        ...

    @property
    @abstractmethod
    def profile(self) -> SelectorProfile:
        ...

    @abstractmethod
    def build_url(self, value: str) -> str:
        """Return the URL-encoded render URL for ``value``."""
        ...

    @abstractmethod
    def fallback_location(self, value: str) -> str:
        """Location given to cards without a venue."""
        ...
