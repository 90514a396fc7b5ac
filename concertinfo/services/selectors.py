"""Locating event cards in a rendered listing.

The listing markup is not stable, so cards are found through an ordered
cascade of CSS selectors: the first selector that matches anything wins,
even when a looser one further down would match more.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)


def resolve_cascade(root: BeautifulSoup | Tag, patterns: Sequence[str]) -> list[Tag]:
    """Return the nodes of the first pattern with at least one match."""
    for pattern in patterns:
        nodes = root.select(pattern)
        if nodes:
            logger.info("Found %d event cards with selector %r", len(nodes), pattern)
            return nodes
        logger.debug("No match for card selector %r", pattern)
    return []


def find_event_links(root: BeautifulSoup | Tag, marker: str) -> list[Tag]:
    """Fallback when no card selector matches: one candidate per event link.

    Anchors without text (image links) are ignored and a repeated href
    keeps only its first anchor.
    """
    links: list[Tag] = []
    seen: set[str] = set()
    for anchor in root.select("a[href]"):
        href = anchor.get("href", "")
        if marker not in href or href in seen:
            continue
        if not anchor.get_text(strip=True):
            continue
        seen.add(href)
        links.append(anchor)
    logger.info("Found %d event links with marker %r", len(links), marker)
    return links
