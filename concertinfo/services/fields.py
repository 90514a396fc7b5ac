"""Per-card field extraction.

Each field walks its own selector chain scoped to one card and always ends
on a concrete default, so a card with missing markup never raises. The
artist chain is the exception: it ends on None, which the assembler drops.
"""

from __future__ import annotations

from collections.abc import Sequence
from urllib.parse import urljoin

from bs4 import Tag


def _clean(text: str) -> str:
    return " ".join(text.split())


def first_text(card: Tag, selectors: Sequence[str]) -> str | None:
    """Whitespace-collapsed text of the first node with non-empty text.

    Selectors are tried in order; within one selector, matches are tried in
    document order.
    """
    for selector in selectors:
        for node in card.select(selector):
            text = _clean(node.get_text())
            if text:
                return text
    return None


def extract_artist(card: Tag, selectors: Sequence[str]) -> str | None:
    """Artist name, or None when no selector yields text."""
    return first_text(card, selectors)


def extract_venue(card: Tag, selectors: Sequence[str], default: str) -> str:
    """First non-empty venue text, first line only (address lines dropped)."""
    for selector in selectors:
        for node in card.select(selector):
            text = node.get_text().strip()
            if text:
                return _clean(text.split("\n")[0])
    return default


def find_date_node(card: Tag, selectors: Sequence[str]) -> Tag | None:
    for selector in selectors:
        node = card.select_one(selector)
        if node is not None:
            return node
    return None


def extract_detail_link(card: Tag, marker: str, origin: str) -> str:
    """Absolute URL of the card's first event detail link, or ""."""
    anchors = [card] if card.name == "a" else []
    anchors.extend(card.select("a[href]"))
    for anchor in anchors:
        href = (anchor.get("href") or "").strip()
        if marker in href:
            return urljoin(origin + "/", href)
    return ""
