"""Last.fm event listings.

Both listings are rendered client-side and their markup has shifted over
time, so the card cascade runs from the current class names down to
loose ``[class*=...]`` matches. The by-user page is served under ``/fr/``
and prints dates like "22 nov. 2025"; the by-city page is the English site.
"""

from __future__ import annotations

from urllib.parse import quote

from concertinfo.config import settings
from concertinfo.targets.base import SelectorProfile, TargetResolver
from concertinfo.targets.registry import register_target

EVENT_LINK_MARKER = "/event/"

CARD_SELECTORS = (
    ".events-list-item",
    ".event-list-item",
    "[class*='EventListItem']",
    ".chartlist-row",
    "article[class*='event']",
    ".event",
)

ARTIST_SELECTORS = (
    ".event-name a",
    "h3 a",
    ".link-block-target",
    "[class*='artist'] a",
    ".chartlist-name a",
    ".event-name",
    "h3",
    "h2",
    "[class*='artist']",
)

VENUE_SELECTORS = (
    ".event-venue",
    "[class*='venue']",
    ".chartlist-venue",
    "[class*='location']",
)

DATE_SELECTORS = (
    "time",
    ".event-date",
    "[class*='date']",
    ".chartlist-timestamp",
)


def lastfm_profile() -> SelectorProfile:
    return SelectorProfile(
        cards=CARD_SELECTORS,
        artist=ARTIST_SELECTORS,
        venue=VENUE_SELECTORS,
        date=DATE_SELECTORS,
        link_marker=EVENT_LINK_MARKER,
        origin=settings.lastfm_base_url,
    )


@register_target("city")
class LastfmCityTarget(TargetResolver):
    """Upcoming events near a city: /events?location=<city>."""

    locale = "en"
    settle_grace_seconds = 3.0
    ready_selector = ".events-list, .event-list-item, [class*='event']"
    default_limit = 20

    @property
    def default_value(self) -> str:
        return settings.default_city

    @property
    def profile(self) -> SelectorProfile:
        return lastfm_profile()

    def build_url(self, value: str) -> str:
        return f"{settings.lastfm_base_url}/events?location={quote(value, safe='')}"

    def fallback_location(self, value: str) -> str:
        return value or settings.default_city


@register_target("user")
class LastfmUserTarget(TargetResolver):
    """Events a Last.fm user is attending: /fr/user/<name>/events."""

    locale = "fr"
    settle_grace_seconds = 5.0

    @property
    def default_value(self) -> str:
        return settings.default_username

    @property
    def profile(self) -> SelectorProfile:
        return lastfm_profile()

    def build_url(self, value: str) -> str:
        return f"{settings.lastfm_base_url}/fr/user/{quote(value, safe='')}/events"

    def fallback_location(self, value: str) -> str:
        return settings.default_city
